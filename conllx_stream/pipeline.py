"""
Pipeline Composition

Chains a sentence source with the optional length filter and local
shuffle into one lazy iterator:

    Reader -> LengthFilter (max_len) -> LocalShuffle (shuffle_buffer_size)
"""

import os
import random
from typing import Callable, Iterator, Optional, Union

from .adapters import LengthFilter, LocalShuffle
from .errors import ConllxReadError
from .reader import Reader
from .sentence import Sentence


def sentence_length(sentence: Sentence) -> int:
    """Length compared against ``max_len``: tokens plus the artificial root"""
    return sentence.graph_len()


def compose(
    source: Iterator,
    max_len: Optional[int] = None,
    shuffle_buffer_size: Optional[int] = None,
    rng: Optional[random.Random] = None,
    length: Callable[..., int] = len,
) -> Iterator:
    """
    Wrap an already-open source in the configured stages.

    Args:
        source: Iterator over records
        max_len: Drop records longer than this (None = no filtering)
        shuffle_buffer_size: Local shuffle buffer size (None or 0 = no shuffling)
        rng: Random number generator for the shuffler (owned by it afterwards)
        length: Function returning the length of a record (default ``len``)

    Returns:
        Iterator with the same protocol as ``source``
    """
    stream = source
    if max_len is not None:
        stream = LengthFilter(stream, max_len, length)
    if shuffle_buffer_size:
        stream = LocalShuffle(stream, shuffle_buffer_size, rng)
    return stream


def _check_bounds(max_len: Optional[int], shuffle_buffer_size: Optional[int]):
    if max_len is not None and max_len < 0:
        raise ValueError(f"max_len must be non-negative, got {max_len}")
    if shuffle_buffer_size is not None and shuffle_buffer_size < 0:
        raise ValueError(f"shuffle_buffer_size must be non-negative, got {shuffle_buffer_size}")


def get_sentence_iter(
    path: Union[str, os.PathLike],
    max_len: Optional[int] = None,
    shuffle_buffer_size: Optional[int] = None,
    seed: Optional[int] = None,
) -> Iterator[Sentence]:
    """
    Open a CoNLL-X corpus and return an iterator over its sentences.

    Depending on the parameters the returned iterator filters sentences
    by their length and/or shuffles them locally, or returns them in
    file order. Every stage has a ``close()`` that closes the file.

    The file is opened immediately: a missing corpus raises
    ``FileNotFoundError`` here, not on the first pull.

    Args:
        path: CoNLL-X file
        max_len: Maximum sentence length, counting the root node (None = no filtering)
        shuffle_buffer_size: Local shuffle buffer size (None or 0 = no shuffling)
        seed: Seed for the shuffler's generator (None = system entropy)
    """
    _check_bounds(max_len, shuffle_buffer_size)
    return compose(Reader(path), max_len, shuffle_buffer_size, random.Random(seed), sentence_length)


class DataIterator(Iterator[Sentence]):
    """
    Iterator over the sentences of a CoNLL-X corpus.

    Each pull returns one sentence or raises ``ConllxReadError`` for a
    sentence that could not be read; the iterator can be polled again
    after a read error. ``StopIteration`` is final.

    The corpus file is closed at the end of the corpus, by ``close()``,
    or when leaving a ``with`` block.

    Args:
        path: CoNLL-X file
        max_len: Maximum sentence length, counting the root node (None = no filtering)
        shuffle_buffer_size: Local shuffle buffer size (None or 0 = no shuffling)
        seed: Seed for the shuffler's generator (None = system entropy)

    Example:
        >>> with DataIterator("train.conll", max_len=100, shuffle_buffer_size=1000) as it:
        ...     for sentence in it:
        ...         train_step(sentence)
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        max_len: Optional[int] = None,
        shuffle_buffer_size: Optional[int] = None,
        seed: Optional[int] = None,
    ):
        _check_bounds(max_len, shuffle_buffer_size)

        self.path = os.fspath(path)
        self.max_len = max_len
        self.shuffle_buffer_size = shuffle_buffer_size
        self.seed = seed

        self.sentences_yielded = 0
        self.read_errors = 0

        self.reader = Reader(self.path)
        self._dataset = compose(
            self.reader, max_len, shuffle_buffer_size, random.Random(seed), sentence_length
        )

    def __iter__(self) -> "DataIterator":
        return self

    def __next__(self) -> Sentence:
        try:
            sentence = next(self._dataset)
        except ConllxReadError:
            self.read_errors += 1
            raise
        self.sentences_yielded += 1
        return sentence

    def close(self):
        """Close the corpus file. Sentences still in the shuffle buffer are drained by later pulls."""
        self.reader.close()

    @property
    def closed(self) -> bool:
        return self.reader.closed

    def __enter__(self) -> "DataIterator":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
