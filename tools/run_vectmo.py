"""Train a vectmo model and/or predict continuations from the command line.

Usage (from repo root):
    python -m tools.run_vectmo --base-path data/vectmo --train-file corpus.txt
    python -m tools.run_vectmo --base-path data/vectmo --seed-text "the c" --seed-text "a"
    python -m tools.run_vectmo --base-path data/vectmo --train-text "cat can run" --seed-text n
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from vectmo.config import DEFAULT_CYCLE_WINDOW, DEFAULT_MAX_CHARS, VectmoConfig
from vectmo.predictor import TextPredictor
from vectmo.results import OperationResult, PredictionResult


def _read_training_text(train_file: str | None, train_text: str | None) -> str | None:
    if train_text is not None:
        return train_text
    if train_file is None:
        return None
    path = Path(train_file)
    if not path.exists():
        raise FileNotFoundError(f"Missing training file: {path}")
    return path.read_text(encoding="utf-8")


def _print_training_summary(predictor: TextPredictor, result: OperationResult) -> None:
    snapshot = predictor.model.snapshot
    print("Training Summary")
    print(f"  base_path: {predictor.base_path}")
    print(f"  status: {result.status.value}")
    if result.message:
        print(f"  message: {result.message}")
    print(f"  transitions: {snapshot.num_transitions()}")
    print(f"  vocabulary_size: {len(snapshot.vocabulary)}")


def _print_prediction(seed_text: str, result: PredictionResult) -> None:
    print("Prediction")
    print(f"  input: {seed_text!r}")
    print(f"  status: {result.status.value}")
    if result.ok:
        print(f"  raw: {result.raw!r}")
        print(f"  output: {result.text!r}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Train and query a vectmo character model.")
    parser.add_argument("--base-path", type=str, required=True)
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--train-file", type=str, default=None)
    source.add_argument("--train-text", type=str, default=None)
    parser.add_argument(
        "--seed-text",
        action="append",
        default=[],
        help="Text to continue; may be given multiple times.",
    )
    parser.add_argument("--max-chars", type=int, default=DEFAULT_MAX_CHARS)
    parser.add_argument("--cycle-window", type=int, default=DEFAULT_CYCLE_WINDOW)
    parser.add_argument(
        "--write-corpus-embedding",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Write the <base>.vec corpus histogram after training (default: True).",
    )
    parser.add_argument("--debug", action="store_true", help="Log per-token similarity snaps.")
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else getattr(logging, args.log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = VectmoConfig(
        max_chars=args.max_chars,
        cycle_window=args.cycle_window,
        write_corpus_embedding=args.write_corpus_embedding,
        debug=args.debug,
    )
    predictor = TextPredictor(config)
    configured = predictor.set_working_file(args.base_path)
    if not configured:
        print(f"error: {configured.message}", file=sys.stderr)
        return 2

    training_text = _read_training_text(args.train_file, args.train_text)
    exit_code = 0
    if training_text is not None:
        result = predictor.pretrain(training_text)
        _print_training_summary(predictor, result)
        if not result:
            return 1

    for seed_text in args.seed_text:
        prediction = predictor.predict(seed_text)
        _print_prediction(seed_text, prediction)
        if not prediction.ok:
            exit_code = 1
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
