"""First-order character transition model with a snapped-word vocabulary.

Training counts every adjacent pair of supported characters in the training
text into a dense `ALPHABET_SIZE x ALPHABET_SIZE` matrix and collects the
whitespace-delimited words of the same text. Pairs involving an unsupported
character are skipped on both sides.

State is held in an immutable `TransitionSnapshot`. `train` and `load` build a
new snapshot and replace the current one in a single assignment; a failed
`load` leaves the previous snapshot in place.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from vectmo.models import persistence
from vectmo.models.snapshot import TransitionSnapshot
from vectmo.results import OperationResult, SimilarityMatch, Status
from vectmo.text.alphabet import ALPHABET_SIZE, encode
from vectmo.text.embedding import embed


FloatArray = NDArray[np.float64]


def count_transitions(text: str) -> NDArray[np.int64]:
    """Return the dense adjacency count matrix of `text`."""

    counts = np.zeros((ALPHABET_SIZE, ALPHABET_SIZE), dtype=np.int64)
    indices = encode(text)
    if indices.size < 2:
        return counts
    src = indices[:-1]
    dst = indices[1:]
    valid = (src >= 0) & (dst >= 0)
    np.add.at(counts, (src[valid], dst[valid]), 1)
    return counts


class TransitionModel:
    """Adjacency table, vocabulary and embedding cache with file persistence.

    The model is mutated only by `train` and `load`. Generation code should
    hold `snapshot` (read-only) rather than the model itself.
    """

    def __init__(self, *, debug: bool = False, debug_max_messages: int = 20) -> None:
        if debug_max_messages < 0:
            raise ValueError("debug_max_messages must be non-negative.")
        self.debug = bool(debug)
        self.debug_max_messages = int(debug_max_messages)
        self._snapshot = TransitionSnapshot.empty()
        self._corpus_embedding: FloatArray | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def snapshot(self) -> TransitionSnapshot:
        return self._snapshot

    @property
    def vocabulary(self) -> tuple[str, ...]:
        return self._snapshot.vocabulary

    @property
    def corpus_embedding(self) -> FloatArray | None:
        """Histogram of the last training text; `None` after `load` or before `train`."""

        return self._corpus_embedding

    def is_trained(self) -> bool:
        return self._snapshot.is_trained()

    def count(self, from_char: str, to_char: str) -> int:
        return self._snapshot.count(from_char, to_char)

    def train(self, text: str) -> "TransitionModel":
        """Rebuild the adjacency table, vocabulary and embedding cache from `text`.

        Returns:
            self
        """

        self._snapshot = TransitionSnapshot.build(count_transitions(text), text.split())
        self._corpus_embedding = embed(text)
        self._logger.info(
            "Trained on %d characters: %d transitions, %d unique words",
            len(text),
            self._snapshot.num_transitions(),
            len(self._snapshot.vocabulary),
        )
        return self

    def find_most_similar_word(self, query: str) -> SimilarityMatch | None:
        return self._snapshot.find_most_similar_word(query)

    def save(self, base_path: str | Path) -> OperationResult:
        """Write `<base>.txt` and `<base>.words`.

        The two writes are independent: a failure on one does not undo the
        other. Returns `IO_FAILURE` if either write fails.
        """

        snapshot = self._snapshot
        failures: list[str] = []

        adj_path = persistence.adjacency_path(base_path)
        try:
            lines = persistence.write_adjacency(adj_path, snapshot.transitions())
        except OSError as exc:
            self._logger.warning("Could not write adjacency file %s: %s", adj_path, exc)
            failures.append(str(adj_path))
        else:
            self._logger.info("Saved %d transitions to %s", lines, adj_path)

        words_path = persistence.vocabulary_path(base_path)
        try:
            words = persistence.write_vocabulary(words_path, snapshot.vocabulary)
        except OSError as exc:
            self._logger.warning("Could not write vocabulary file %s: %s", words_path, exc)
            failures.append(str(words_path))
        else:
            self._logger.info("Saved %d words to %s", words, words_path)

        if failures:
            return OperationResult(Status.IO_FAILURE, "failed to write " + ", ".join(failures))
        return OperationResult(Status.OK)

    def load(self, base_path: str | Path) -> OperationResult:
        """Replace the model with `<base>.txt` and `<base>.words`.

        Returns `IO_FAILURE` if either file cannot be read and `UNTRAINED` if
        the adjacency file holds no usable record. The current model is kept
        unchanged on any failure.
        """

        adj_path = persistence.adjacency_path(base_path)
        words_path = persistence.vocabulary_path(base_path)
        try:
            parsed = persistence.read_adjacency(
                adj_path,
                debug=self.debug,
                debug_max_messages=self.debug_max_messages,
            )
            words = persistence.read_vocabulary(words_path)
        except OSError as exc:
            self._logger.warning("Could not load model from %s: %s", base_path, exc)
            return OperationResult(Status.IO_FAILURE, str(exc))

        if parsed.accepted_lines == 0:
            self._logger.warning(
                "No usable transitions in %s (%d lines ignored)", adj_path, parsed.ignored_lines
            )
            return OperationResult(Status.UNTRAINED, f"no usable records in {adj_path}")

        self._snapshot = TransitionSnapshot.build(parsed.counts, words)
        self._corpus_embedding = None
        self._logger.info(
            "Loaded %d transitions (%d lines ignored) and %d words from %s",
            parsed.accepted_lines,
            parsed.ignored_lines,
            len(self._snapshot.vocabulary),
            base_path,
        )
        return OperationResult(Status.OK)
