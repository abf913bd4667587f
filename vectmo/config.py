"""Runtime configuration for the prediction pipeline."""

from __future__ import annotations

from dataclasses import dataclass


DEFAULT_MAX_CHARS = 50
DEFAULT_CYCLE_WINDOW = 6


@dataclass(frozen=True)
class VectmoConfig:
    """Configuration for `TextPredictor`.

    Notes:
    - `max_chars` is the default number of generation steps per prediction.
    - `cycle_window` is the trailing-window length used for cycle avoidance.
    - `write_corpus_embedding` controls the `.vec` inspection file written by
      `pretrain`.
    - `debug` enables capped per-token DEBUG logging during snapping and loading.
    """

    max_chars: int = DEFAULT_MAX_CHARS
    cycle_window: int = DEFAULT_CYCLE_WINDOW
    write_corpus_embedding: bool = True
    debug: bool = False
    debug_max_messages: int = 20

    def validate(self) -> None:
        if self.max_chars < 0:
            raise ValueError("max_chars must be non-negative.")
        if self.cycle_window < 1:
            raise ValueError("cycle_window must be at least 1.")
        if self.debug_max_messages < 0:
            raise ValueError("debug_max_messages must be non-negative.")
