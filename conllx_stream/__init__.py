"""
Streaming CoNLL-X Corpora for Training

This module streams CoNLL-X corpora that don't fit in RAM, with
optional filtering by sentence length and bounded-memory local
shuffling.

Main components:
- DataIterator: Iterator over the (filtered, shuffled) sentences of a corpus
- LengthFilter, LocalShuffle: Composable iterator adapters
- RandomRemoveVec: Buffer with O(1) random removal behind the shuffle
- ConllxStreamingDataset: IterableDataset for PyTorch training loops
- create_sentence_dataloader: Factory function for DataLoaders

Usage:
    from conllx_stream import DataIterator, ConllxReadError

    sentences = DataIterator("train.conll", max_len=100, shuffle_buffer_size=10000, seed=42)
    while True:
        try:
            sentence = next(sentences)
        except StopIteration:
            break
        except ConllxReadError:
            continue
"""

from .errors import (
    ConllxError,
    ConllxReadError,
)

from .sentence import (
    Features,
    Sentence,
    Token,
)

from .reader import Reader

from .writer import (
    Writer,
    write_sentences,
)

from .random_remove_vec import RandomRemoveVec

from .adapters import (
    LengthFilter,
    LocalShuffle,
)

from .pipeline import (
    DataIterator,
    compose,
    get_sentence_iter,
)

from .streaming_dataset import (
    ConllxStreamingDataset,
    DatasetState,
)

from .dataloader_factory import (
    batch_lengths,
    collate_sentences,
    create_dataloader_from_config,
    create_sentence_dataloader,
    get_dataloader_info,
    print_pipeline_status,
)

from .config import (
    PipelineConfig,
    DEFAULT_CONFIG,
    PRESETS,
    get_preset,
    load_config,
)

__all__ = [
    # Errors
    "ConllxError",
    "ConllxReadError",
    # Data model
    "Features",
    "Sentence",
    "Token",
    # CoNLL-X I/O
    "Reader",
    "Writer",
    "write_sentences",
    # Pipeline
    "RandomRemoveVec",
    "LengthFilter",
    "LocalShuffle",
    "DataIterator",
    "compose",
    "get_sentence_iter",
    # PyTorch integration
    "ConllxStreamingDataset",
    "DatasetState",
    "batch_lengths",
    "collate_sentences",
    "create_dataloader_from_config",
    "create_sentence_dataloader",
    "get_dataloader_info",
    "print_pipeline_status",
    # Config
    "PipelineConfig",
    "DEFAULT_CONFIG",
    "PRESETS",
    "get_preset",
    "load_config",
]

__version__ = "1.0.0"
