"""Immutable view of a trained transition model.

A `TransitionSnapshot` bundles the three pieces of model state that must stay
in sync: the dense adjacency count matrix, the sorted vocabulary and the
vocabulary's embedding cache. Arrays are copied on construction and marked
non-writeable; the owning `TransitionModel` swaps whole snapshots instead of
mutating one, so readers holding a snapshot never observe a partial update.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

import numpy as np
from numpy.typing import NDArray

from vectmo.results import SimilarityMatch
from vectmo.text.alphabet import ALPHABET_SIZE, INVALID_INDEX, SUPPORTED_CHARS, index_of
from vectmo.text.embedding import cosine_similarity, embed, embed_many, similarity_rank_keys


IntArray = NDArray[np.int64]
FloatArray = NDArray[np.float64]


def _frozen(array: np.ndarray) -> np.ndarray:
    out = np.array(array, copy=True)
    out.flags.writeable = False
    return out


@dataclass(frozen=True, slots=True, eq=False)
class TransitionSnapshot:
    """Adjacency counts, vocabulary and embedding cache of one trained model.

    Invariants:
    - `counts` has shape `(ALPHABET_SIZE, ALPHABET_SIZE)`; `counts[i, j]` is how
      often symbol `j` followed symbol `i`. Zero means "no entry".
    - `vocabulary` is sorted and deduplicated, with no empty or blank words.
    - `embeddings[k]` is `embed(vocabulary[k])`.
    """

    counts: IntArray
    vocabulary: tuple[str, ...]
    embeddings: FloatArray

    @classmethod
    def empty(cls) -> "TransitionSnapshot":
        return cls.build(np.zeros((ALPHABET_SIZE, ALPHABET_SIZE), dtype=np.int64), ())

    @classmethod
    def build(cls, counts: np.ndarray, words: Iterable[str]) -> "TransitionSnapshot":
        """Create a snapshot, normalizing the vocabulary and rebuilding embeddings."""

        counts = np.asarray(counts, dtype=np.int64)
        if counts.shape != (ALPHABET_SIZE, ALPHABET_SIZE):
            raise ValueError(
                f"counts must have shape ({ALPHABET_SIZE}, {ALPHABET_SIZE}), got {counts.shape}."
            )
        if np.any(counts < 0):
            raise ValueError("counts must be non-negative.")
        vocabulary = tuple(sorted({word for word in words if word.strip()}))
        return cls(
            counts=_frozen(counts),
            vocabulary=vocabulary,
            embeddings=_frozen(embed_many(vocabulary)),
        )

    def is_trained(self) -> bool:
        return bool(np.any(self.counts))

    def count(self, from_char: str, to_char: str) -> int:
        """Return how often `to_char` followed `from_char` (0 if unsupported)."""

        from_idx = index_of(from_char)
        to_idx = index_of(to_char)
        if from_idx == INVALID_INDEX or to_idx == INVALID_INDEX:
            return 0
        return int(self.counts[from_idx, to_idx])

    def followers(self, char: str) -> list[tuple[str, int]]:
        """Return `(next_char, count)` pairs ranked for generation.

        Order: descending count, then ascending character code.
        """

        idx = index_of(char)
        if idx == INVALID_INDEX:
            return []
        row = self.counts[idx]
        pairs = [(SUPPORTED_CHARS[j], int(row[j])) for j in np.flatnonzero(row)]
        pairs.sort(key=lambda pair: (-pair[1], ord(pair[0])))
        return pairs

    def transitions(self) -> Iterator[tuple[int, int, int]]:
        """Yield `(from_index, to_index, count)` in row-major index order."""

        rows, cols = np.nonzero(self.counts)
        for from_idx, to_idx in zip(rows.tolist(), cols.tolist()):
            yield from_idx, to_idx, int(self.counts[from_idx, to_idx])

    def num_transitions(self) -> int:
        return int(np.count_nonzero(self.counts))

    def find_most_similar_word(self, query: str) -> SimilarityMatch | None:
        """Return the vocabulary word closest to `query`, or `None` without a vocabulary.

        Highest cosine similarity wins, compared exactly on integer histogram
        counts. Ties go to the word whose length is closest to `len(query)`;
        remaining ties keep the word that comes first in vocabulary order.
        """

        if not self.vocabulary:
            return None

        query_vec = embed(query)
        keys = similarity_rank_keys(query_vec, self.embeddings)
        best_key = max(keys)
        tied = [k for k, key in enumerate(keys) if key == best_key]
        distances = [abs(len(self.vocabulary[k]) - len(query)) for k in tied]
        best_idx = tied[int(np.argmin(distances))]
        score = cosine_similarity(query_vec, self.embeddings[best_idx])
        return SimilarityMatch(word=self.vocabulary[best_idx], score=score)
