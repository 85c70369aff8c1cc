"""
CoNLL-X Writer
"""

import os
from typing import IO, Iterable, Union

from .sentence import Sentence


class Writer:
    """
    Write sentences in CoNLL-X format, separated by blank lines.

    Args:
        path: Output file path
        encoding: File encoding
    """

    def __init__(self, path: Union[str, os.PathLike], encoding: str = "utf-8"):
        self.path = os.fspath(path)
        self._file: IO[str] = open(self.path, "w", encoding=encoding)
        self.sentences_written = 0

    def write(self, sentence: Sentence):
        if self.sentences_written > 0:
            self._file.write("\n")
        self._file.write(sentence.to_conllx())
        self._file.write("\n")
        self.sentences_written += 1

    def close(self):
        self._file.close()

    def __enter__(self) -> "Writer":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


def write_sentences(path: Union[str, os.PathLike], sentences: Iterable[Sentence]) -> int:
    """
    Write all sentences to ``path``.

    Returns:
        Number of sentences written
    """
    with Writer(path) as writer:
        for sentence in sentences:
            writer.write(sentence)
        return writer.sentences_written
