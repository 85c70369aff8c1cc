"""
Configuration classes for the CoNLL-X streaming pipeline

Provides dataclass-based configuration for the pipeline and its
DataLoader, plus loading from experiment YAML files.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml


@dataclass
class PipelineConfig:
    """
    Configuration for streaming a CoNLL-X corpus.

    Attributes:
        corpus_path: Path to the CoNLL-X file
        max_len: Drop sentences whose length, counting the root node, exceeds this (None = no filter)
        shuffle_buffer_size: Local shuffle buffer size (None or 0 = no shuffling)
        seed: Shuffle seed for reproducibility (None = system entropy)
        batch_size: Sentences per batch
        num_workers: Number of dataloader workers (0 recommended for streaming)
        drop_last: Drop last incomplete batch
        skip_errors: Skip unreadable sentences instead of raising
    """
    # Data source
    corpus_path: Optional[str] = None

    # Filtering
    max_len: Optional[int] = None

    # Shuffle configuration
    shuffle_buffer_size: Optional[int] = None
    seed: Optional[int] = None

    # DataLoader configuration
    batch_size: int = 32
    num_workers: int = 0
    drop_last: bool = False
    skip_errors: bool = False

    def __post_init__(self):
        """Validate configuration after initialization"""
        assert self.max_len is None or self.max_len >= 0, f"max_len must be non-negative, got {self.max_len}"
        assert self.shuffle_buffer_size is None or self.shuffle_buffer_size >= 0, \
            f"shuffle_buffer_size must be non-negative, got {self.shuffle_buffer_size}"
        assert self.batch_size > 0, f"batch_size must be positive, got {self.batch_size}"
        assert self.num_workers >= 0, f"num_workers must be non-negative, got {self.num_workers}"

    @property
    def shuffles(self) -> bool:
        """Whether local shuffling is enabled"""
        return bool(self.shuffle_buffer_size)

    def to_dict(self) -> dict:
        """Convert config to dictionary"""
        return {
            "corpus_path": self.corpus_path,
            "max_len": self.max_len,
            "shuffle_buffer_size": self.shuffle_buffer_size,
            "seed": self.seed,
            "batch_size": self.batch_size,
            "num_workers": self.num_workers,
            "drop_last": self.drop_last,
            "skip_errors": self.skip_errors,
        }

    @classmethod
    def from_dict(cls, config_dict: dict) -> "PipelineConfig":
        """Create config from dictionary"""
        return cls(**{k: v for k, v in config_dict.items() if k in cls.__dataclass_fields__})


# Default configuration
DEFAULT_CONFIG = PipelineConfig()


# Preset configurations for common use cases
PRESETS = {
    "debug": PipelineConfig(
        max_len=50,
        shuffle_buffer_size=100,
        seed=42,
        batch_size=4,
    ),
    "evaluation": PipelineConfig(
        max_len=None,
        shuffle_buffer_size=None,  # File order
        batch_size=64,
    ),
    "training": PipelineConfig(
        max_len=100,
        shuffle_buffer_size=10000,
        batch_size=32,
        skip_errors=True,
    ),
}


def get_preset(name: str) -> PipelineConfig:
    """Get a preset configuration by name"""
    if name not in PRESETS:
        raise ValueError(f"Unknown preset '{name}'. Available: {list(PRESETS.keys())}")
    return PRESETS[name]


def load_config(config_path: Union[str, Path]) -> PipelineConfig:
    """
    Load pipeline configuration from a YAML file.

    The file has a ``data`` and a ``loader`` section; missing keys keep
    their defaults:

        data:
          corpus_path: train.conll
          max_len: 100
          shuffle_buffer_size: 10000
          seed: 42
        loader:
          batch_size: 32
          skip_errors: true

    Args:
        config_path: Path to the YAML file

    Returns:
        PipelineConfig built from the file
    """
    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}

    data = config.get("data", {}) or {}
    loader = config.get("loader", {}) or {}

    # Flatten nested config into single dict
    flat = {**data, **loader}
    return PipelineConfig.from_dict(flat)
