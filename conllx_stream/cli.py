"""
Stream a CoNLL-X corpus through the length filter and local shuffle.

Usage:
    conllx-stream train.conll --max-len 100 --shuffle-buffer-size 10000 --seed 42
    conllx-stream train.conll --config experiments/debug.yaml --output shuffled.conll
"""

import argparse
import sys
from typing import List, Optional

from .config import PipelineConfig, load_config
from .dataloader_factory import print_pipeline_status
from .errors import ConllxReadError
from .pipeline import DataIterator
from .writer import Writer


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """Merge the YAML config (if any) with command line overrides"""
    config = load_config(args.config) if args.config else PipelineConfig()
    overrides = {
        "corpus_path": args.corpus,
        "max_len": args.max_len,
        "shuffle_buffer_size": args.shuffle_buffer_size,
        "seed": args.seed,
    }
    merged = config.to_dict()
    merged.update({k: v for k, v in overrides.items() if v is not None})
    if args.skip_errors:
        merged["skip_errors"] = True
    return PipelineConfig.from_dict(merged)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="conllx-stream", description="Filter and locally shuffle a CoNLL-X corpus")
    p.add_argument("corpus", help="CoNLL-X corpus file")
    p.add_argument("--config", help="YAML config (command line flags override it)")
    p.add_argument("--max-len", dest="max_len", type=int, help="Drop sentences whose length, counting the root node, exceeds this")
    p.add_argument("--shuffle-buffer-size", dest="shuffle_buffer_size", type=int,
                   help="Local shuffle buffer size (0 = no shuffling)")
    p.add_argument("--seed", type=int)
    p.add_argument("--limit", type=int, default=None, help="Stop after this many sentences")
    p.add_argument("--output", help="Write the resulting corpus to this file")
    p.add_argument("--skip-errors", dest="skip_errors", action="store_true",
                   help="Skip unreadable sentences instead of aborting")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except AssertionError as e:
        print(f"[ERROR] Invalid configuration: {e}")
        return 1

    print_pipeline_status(config)

    try:
        sentences = DataIterator(
            config.corpus_path,
            max_len=config.max_len,
            shuffle_buffer_size=config.shuffle_buffer_size,
            seed=config.seed,
        )
    except OSError as e:
        print(f"[ERROR] Cannot open corpus: {e}")
        return 1

    writer = Writer(args.output) if args.output else None
    total_tokens = 0
    longest = 0

    try:
        while args.limit is None or sentences.sentences_yielded < args.limit:
            try:
                sentence = next(sentences)
            except StopIteration:
                break
            except ConllxReadError as e:
                if not config.skip_errors:
                    print(f"[ERROR] {e}")
                    return 1
                print(f"[WARN] Skipping unreadable sentence: {e}")
                continue

            total_tokens += len(sentence)
            longest = max(longest, len(sentence))
            if writer is not None:
                writer.write(sentence)
    finally:
        sentences.close()
        if writer is not None:
            writer.close()

    n = sentences.sentences_yielded
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"  Sentences:        {n:,}")
    print(f"  Tokens:           {total_tokens:,}")
    print(f"  Longest sentence: {longest}")
    if n:
        print(f"  Mean length:      {total_tokens / n:.2f}")
    print(f"  Read errors:      {sentences.read_errors}")
    if writer is not None:
        print(f"[OK] Wrote {writer.sentences_written:,} sentences to {args.output}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
