"""Status codes and result objects returned by model and pipeline operations.

Recoverable conditions (missing files, empty input, untrained model, empty
vocabulary) are reported through these types instead of exceptions so callers
can branch on `status` directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Status(str, Enum):
    OK = "ok"
    NOT_CONFIGURED = "not_configured"
    IO_FAILURE = "io_failure"
    UNTRAINED = "untrained"
    NO_INPUT = "no_input"
    NO_CONTINUATION = "no_continuation"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a train/save/load style operation.

    Truthy only when `status` is `Status.OK`.
    """

    status: Status
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class SimilarityMatch:
    """Nearest vocabulary word for a query; `score` is informational only."""

    word: str
    score: float


@dataclass(frozen=True)
class PredictionResult:
    """Outcome of one prediction request.

    `raw` is the bigram walk with the seed stripped; `text` is the
    vocabulary-snapped continuation. Both are empty unless `status` is
    `Status.OK`. `snap_status` is `Status.NO_MATCH` when the model has no
    vocabulary, in which case `text` equals `raw`.
    """

    status: Status
    seed: str | None = None
    raw: str = ""
    text: str = ""
    snap_status: Status = Status.OK

    @property
    def ok(self) -> bool:
        return self.status is Status.OK
