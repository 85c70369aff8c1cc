"""
CoNLL-X Reader

Streams sentences from a CoNLL-X file without loading it into memory.
Sentences are separated by blank lines; each token line has ten
tab-separated columns:

    ID FORM LEMMA CPOSTAG POSTAG FEATS HEAD DEPREL PHEAD PDEPREL
"""

import os
from typing import IO, Iterator, List, Optional, Union

from .errors import ConllxReadError
from .sentence import EMPTY, Features, Sentence, Token

N_COLUMNS = 10


class Reader(Iterator[Sentence]):
    """
    Iterator over the sentences of a CoNLL-X file.

    The file is opened when the reader is constructed, so a missing or
    unreadable corpus fails right away with an ``OSError``.

    A malformed sentence (including one that is not valid in
    ``encoding``) raises ``ConllxReadError`` for that pull only;
    the next pull continues with the following sentence. At the end of
    the file the file is closed and every further pull raises
    ``StopIteration``.

    Args:
        path: Path to the CoNLL-X file
        encoding: File encoding

    Example:
        >>> with Reader("train.conll") as reader:
        ...     for sentence in reader:
        ...         print(len(sentence))
    """

    def __init__(self, path: Union[str, os.PathLike], encoding: str = "utf-8"):
        self.path = os.fspath(path)
        self.encoding = encoding
        # Binary mode: a decoding error stays confined to its sentence
        self._file: Optional[IO[bytes]] = open(self.path, "rb")
        self._line_no = 0

    def __iter__(self) -> "Reader":
        return self

    def __next__(self) -> Sentence:
        if self._file is None:
            raise StopIteration

        lines: List[bytes] = []
        first_line_no = 0
        for line in self._file:
            self._line_no += 1
            line = line.rstrip(b"\r\n")
            if not line.strip():
                if lines:
                    break
                continue
            if not lines:
                first_line_no = self._line_no
            lines.append(line)
        else:
            self.close()
            if not lines:
                raise StopIteration

        return self._parse_sentence(lines, first_line_no)

    def _decode(self, line: bytes, line_no: int) -> str:
        try:
            return line.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise ConllxReadError(
                f"invalid {self.encoding} at byte {e.start}: {e.reason}", line_no, self.path
            ) from None

    def _parse_sentence(self, lines: List[bytes], first_line_no: int) -> Sentence:
        tokens = []
        for offset, line in enumerate(lines):
            line_no = first_line_no + offset
            fields = self._decode(line, line_no).split("\t")
            if len(fields) != N_COLUMNS:
                raise ConllxReadError(
                    f"expected {N_COLUMNS} columns, got {len(fields)}", line_no, self.path
                )

            token_id = self._parse_int(fields[0], "ID", line_no)
            if token_id != offset + 1:
                raise ConllxReadError(
                    f"expected token ID {offset + 1}, got {fields[0]}", line_no, self.path
                )

            tokens.append(Token(
                form=fields[1],
                lemma=_optional(fields[2]),
                cpos=_optional(fields[3]),
                pos=_optional(fields[4]),
                features=Features(fields[5]) if fields[5] != EMPTY else None,
                head=self._parse_optional_int(fields[6], "HEAD", line_no),
                head_rel=_optional(fields[7]),
                p_head=self._parse_optional_int(fields[8], "PHEAD", line_no),
                p_head_rel=_optional(fields[9]),
            ))

        return Sentence(tokens)

    def _parse_int(self, value: str, column: str, line_no: int) -> int:
        try:
            return int(value)
        except ValueError:
            raise ConllxReadError(f"invalid {column} value: {value!r}", line_no, self.path) from None

    def _parse_optional_int(self, value: str, column: str, line_no: int) -> Optional[int]:
        if value == EMPTY:
            return None
        return self._parse_int(value, column, line_no)

    def close(self):
        """Close the underlying file. Further pulls report exhaustion."""
        if self._file is not None:
            self._file.close()
            self._file = None

    @property
    def closed(self) -> bool:
        return self._file is None

    def __enter__(self) -> "Reader":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def _optional(value: str) -> Optional[str]:
    return None if value == EMPTY else value
