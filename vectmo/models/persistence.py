"""On-disk formats for a persisted transition model.

Given a base path `B`:
- `B.txt`: adjacency triples, one `<from_index> <to_index> <count>` per line
- `B.words`: vocabulary, one token per line
- `B.vec`: whole-corpus histogram, 96 space-separated counts on one line
  (inspection only, never read back)

Readers here raise `OSError` for missing/unreadable files; converting that to
a status is left to `TransitionModel`.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from vectmo.text.alphabet import ALPHABET_SIZE


ADJACENCY_SUFFIX = ".txt"
VOCABULARY_SUFFIX = ".words"
CORPUS_EMBEDDING_SUFFIX = ".vec"

IntArray = NDArray[np.int64]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedAdjacency:
    """Result of parsing an adjacency file."""

    counts: IntArray
    accepted_lines: int
    ignored_lines: int


def _with_suffix(base_path: str | Path, suffix: str) -> Path:
    base = Path(base_path)
    return base.with_name(base.name + suffix)


def adjacency_path(base_path: str | Path) -> Path:
    return _with_suffix(base_path, ADJACENCY_SUFFIX)


def vocabulary_path(base_path: str | Path) -> Path:
    return _with_suffix(base_path, VOCABULARY_SUFFIX)


def corpus_embedding_path(base_path: str | Path) -> Path:
    return _with_suffix(base_path, CORPUS_EMBEDDING_SUFFIX)


def write_adjacency(path: str | Path, triples: Iterable[tuple[int, int, int]]) -> int:
    """Overwrite `path` with adjacency triples; return the number of lines written."""

    written = 0
    with Path(path).open("w", encoding="ascii", newline="\n") as fh:
        for from_idx, to_idx, count in triples:
            fh.write(f"{from_idx} {to_idx} {count}\n")
            written += 1
    return written


def parse_adjacency(
    text: str,
    *,
    debug: bool = False,
    debug_max_messages: int = 20,
) -> ParsedAdjacency:
    """Parse adjacency triples, skipping malformed or out-of-range lines.

    A line is accepted when it holds exactly three integers, both indices lie
    in `[0, ALPHABET_SIZE)` and the count is positive. A later line for the same
    pair overwrites an earlier one.
    """

    counts = np.zeros((ALPHABET_SIZE, ALPHABET_SIZE), dtype=np.int64)
    accepted = 0
    ignored = 0
    messages = 0

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        fields = line.split()
        reason: str | None = None
        if len(fields) != 3:
            reason = "expected 3 fields"
        else:
            try:
                from_idx, to_idx, count = (int(field) for field in fields)
            except ValueError:
                reason = "non-integer field"
            else:
                if not (0 <= from_idx < ALPHABET_SIZE and 0 <= to_idx < ALPHABET_SIZE):
                    reason = "index out of range"
                elif count <= 0:
                    reason = "non-positive count"

        if reason is not None:
            ignored += 1
            if debug and messages < debug_max_messages:
                logger.debug("Skipping adjacency line %d (%s): %r", line_no, reason, raw_line)
                messages += 1
            continue

        counts[from_idx, to_idx] = count
        accepted += 1

    return ParsedAdjacency(counts=counts, accepted_lines=accepted, ignored_lines=ignored)


def read_adjacency(
    path: str | Path,
    *,
    debug: bool = False,
    debug_max_messages: int = 20,
) -> ParsedAdjacency:
    text = Path(path).read_text(encoding="ascii", errors="replace")
    return parse_adjacency(text, debug=debug, debug_max_messages=debug_max_messages)


def write_vocabulary(path: str | Path, words: Iterable[str]) -> int:
    """Overwrite `path` with one word per line; return the number of words written."""

    written = 0
    with Path(path).open("w", encoding="utf-8", newline="\n") as fh:
        for word in words:
            fh.write(f"{word}\n")
            written += 1
    return written


def read_vocabulary(path: str | Path) -> list[str]:
    """Return every non-blank line of `path` in file order, without CRLF carriage returns."""

    text = Path(path).read_text(encoding="utf-8")
    return [line.rstrip("\r") for line in text.split("\n") if line.strip()]


def write_corpus_embedding(path: str | Path, embedding: NDArray[np.float64]) -> None:
    """Overwrite `path` with the histogram counts on a single line."""

    values = " ".join(str(int(value)) for value in np.asarray(embedding).tolist())
    Path(path).write_text(values + "\n", encoding="ascii")
