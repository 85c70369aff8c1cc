"""
Streaming CoNLL-X Dataset

IterableDataset that streams sentences from a CoNLL-X corpus through
the length filter and local shuffle, for use with a PyTorch DataLoader.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Union

from torch.utils.data import IterableDataset

from .errors import ConllxReadError
from .pipeline import get_sentence_iter
from .sentence import Sentence


@dataclass
class DatasetState:
    """Progress of the streaming dataset"""
    sentences_yielded: int
    read_errors: int
    current_epoch: int
    seed: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sentences_yielded": self.sentences_yielded,
            "read_errors": self.read_errors,
            "current_epoch": self.current_epoch,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "DatasetState":
        return cls(
            sentences_yielded=d.get("sentences_yielded", 0),
            read_errors=d.get("read_errors", 0),
            current_epoch=d.get("current_epoch", 0),
            seed=d.get("seed"),
        )


class ConllxStreamingDataset(IterableDataset):
    """
    Streaming dataset over a CoNLL-X corpus.

    Every iteration opens the corpus again and streams it through the
    configured stages. Memory usage is bounded by the shuffle buffer,
    regardless of corpus size.

    Args:
        path: CoNLL-X file
        max_len: Drop sentences whose length, counting the root node, exceeds this (None = no filter)
        shuffle_buffer_size: Local shuffle buffer size (None or 0 = no shuffling)
        seed: Random seed for reproducibility (None = system entropy)
        skip_errors: Skip unreadable sentences with a warning instead of raising

    Example:
        >>> dataset = ConllxStreamingDataset("train.conll", max_len=100, shuffle_buffer_size=1000, seed=42)
        >>> for sentence in dataset:
        ...     print(len(sentence))
        ...     break
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        max_len: Optional[int] = None,
        shuffle_buffer_size: Optional[int] = None,
        seed: Optional[int] = None,
        skip_errors: bool = False,
    ):
        super().__init__()

        if max_len is not None and max_len < 0:
            raise ValueError(f"max_len must be non-negative, got {max_len}")
        if shuffle_buffer_size is not None and shuffle_buffer_size < 0:
            raise ValueError(f"shuffle_buffer_size must be non-negative, got {shuffle_buffer_size}")

        self.path = os.fspath(path)
        self.max_len = max_len
        self.shuffle_buffer_size = shuffle_buffer_size
        self.seed = seed
        self.skip_errors = skip_errors

        # Fail now rather than on the first batch
        with open(self.path, "rb"):
            pass

        self._state = DatasetState(
            sentences_yielded=0,
            read_errors=0,
            current_epoch=0,
            seed=seed,
        )

    def _effective_seed(self) -> Optional[int]:
        # Different shuffling each epoch, still reproducible
        if self.seed is None:
            return None
        return self.seed + self._state.current_epoch

    def __iter__(self) -> Iterator[Sentence]:
        """
        Iterate over the corpus, yielding sentences.

        With ``skip_errors`` unreadable sentences are reported and
        skipped; otherwise the first ``ConllxReadError`` ends the
        iteration and propagates to the consumer.

        ``sentences_yielded`` and ``read_errors`` count the current pass
        only. The corpus file is closed when the pass is over, also when
        the consumer stops early.
        """
        self._state.sentences_yielded = 0
        self._state.read_errors = 0

        sentences = get_sentence_iter(
            self.path,
            max_len=self.max_len,
            shuffle_buffer_size=self.shuffle_buffer_size,
            seed=self._effective_seed(),
        )

        try:
            while True:
                try:
                    sentence = next(sentences)
                except StopIteration:
                    break
                except ConllxReadError as e:
                    self._state.read_errors += 1
                    if not self.skip_errors:
                        raise
                    print(f"[WARN] Skipping unreadable sentence: {e}")
                    continue

                self._state.sentences_yielded += 1
                yield sentence
        finally:
            sentences.close()

    def set_epoch(self, epoch: int):
        """
        Set the current epoch for shuffle seed variation.

        Call this at the start of each epoch to get different shuffling.

        Args:
            epoch: Current epoch number (0-indexed)
        """
        self._state.current_epoch = epoch

    def get_stats(self) -> Dict[str, Any]:
        """
        Get current dataset statistics.

        Returns:
            Dictionary with statistics about streamed data
        """
        return {
            "sentences_yielded": self._state.sentences_yielded,
            "read_errors": self._state.read_errors,
            "current_epoch": self._state.current_epoch,
            "max_len": self.max_len,
            "shuffle_buffer_size": self.shuffle_buffer_size,
        }
