"""
DataLoader Factory for CoNLL-X Streaming

Provides factory functions to create DataLoaders that yield batches of
sentences from a streaming CoNLL-X corpus.
"""

import os
from typing import List, Optional, Union

import torch
from torch.utils.data import DataLoader

from .config import PipelineConfig
from .sentence import Sentence
from .streaming_dataset import ConllxStreamingDataset


def collate_sentences(batch: List[Sentence]) -> List[Sentence]:
    """Keep a batch of sentences as a plain list (sentences are not tensors)"""
    return list(batch)


def batch_lengths(batch: List[Sentence]) -> torch.Tensor:
    """
    Get the lengths of the sentences in a batch.

    Returns:
        Tensor of shape [batch_size] with dtype torch.long
    """
    return torch.tensor([len(sentence) for sentence in batch], dtype=torch.long)


def create_sentence_dataloader(
    path: Union[str, os.PathLike],
    batch_size: int = 32,
    max_len: Optional[int] = None,
    shuffle_buffer_size: Optional[int] = None,
    seed: Optional[int] = None,
    num_workers: int = 0,
    drop_last: bool = False,
    skip_errors: bool = False,
) -> DataLoader:
    """
    Create a streaming dataloader over a CoNLL-X corpus.

    Args:
        path: CoNLL-X file
        batch_size: Sentences per batch
        max_len: Drop sentences whose length, counting the root node, exceeds this (None = no filter)
        shuffle_buffer_size: Local shuffle buffer size (None or 0 = no shuffling)
        seed: Random seed for reproducibility
        num_workers: DataLoader workers (0 recommended for streaming)
        drop_last: Drop last incomplete batch
        skip_errors: Skip unreadable sentences instead of raising

    Returns:
        DataLoader yielding lists of Sentence objects

    Example:
        >>> loader = create_sentence_dataloader("train.conll", batch_size=16, max_len=100)
        >>> for batch in loader:
        ...     print(batch_lengths(batch))
        ...     break
    """
    if num_workers > 0:
        # Every worker would stream the whole corpus
        print(f"[WARN] num_workers={num_workers}: each worker reads the full corpus, "
              "sentences will be repeated. Use num_workers=0 for streaming.")

    dataset = ConllxStreamingDataset(
        path,
        max_len=max_len,
        shuffle_buffer_size=shuffle_buffer_size,
        seed=seed,
        skip_errors=skip_errors,
    )

    return DataLoader(
        dataset,
        batch_size=batch_size,
        num_workers=num_workers,
        drop_last=drop_last,
        collate_fn=collate_sentences,
    )


def create_dataloader_from_config(config: PipelineConfig) -> DataLoader:
    """
    Create a dataloader from a PipelineConfig object.

    Args:
        config: PipelineConfig with all parameters

    Returns:
        DataLoader yielding lists of Sentence objects
    """
    if config.corpus_path is None:
        raise ValueError("config.corpus_path must be set to create a dataloader")

    return create_sentence_dataloader(
        config.corpus_path,
        batch_size=config.batch_size,
        max_len=config.max_len,
        shuffle_buffer_size=config.shuffle_buffer_size,
        seed=config.seed,
        num_workers=config.num_workers,
        drop_last=config.drop_last,
        skip_errors=config.skip_errors,
    )


def get_dataloader_info(dataloader: DataLoader) -> dict:
    """
    Get information about a dataloader.

    Args:
        dataloader: DataLoader instance

    Returns:
        Dictionary with dataloader info
    """
    dataset = dataloader.dataset

    info = {
        "batch_size": dataloader.batch_size,
        "num_workers": dataloader.num_workers,
        "drop_last": dataloader.drop_last,
    }

    # Add dataset info if available
    if hasattr(dataset, "path"):
        info["path"] = dataset.path
    if hasattr(dataset, "max_len"):
        info["max_len"] = dataset.max_len
    if hasattr(dataset, "shuffle_buffer_size"):
        info["shuffle_buffer_size"] = dataset.shuffle_buffer_size
    if hasattr(dataset, "seed"):
        info["seed"] = dataset.seed

    return info


def print_pipeline_status(config: PipelineConfig):
    """Print the pipeline stages a config enables"""
    print("=" * 50)
    print("Pipeline Status")
    print("=" * 50)
    print(f"Corpus: {config.corpus_path}")

    if config.max_len is not None:
        print(f"[OK] Length filter: max_len={config.max_len}")
    else:
        print("[--] Length filter disabled")

    if config.shuffles:
        seed = config.seed if config.seed is not None else "random"
        print(f"[OK] Local shuffle: buffer_size={config.shuffle_buffer_size}, seed={seed}")
    else:
        print("[--] Local shuffle disabled (file order)")

    print("=" * 50)
