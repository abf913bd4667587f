"""Character-histogram embeddings and cosine similarity.

`embed(text)` is a fixed transform: slot `i` counts how often
`SUPPORTED_CHARS[i]` appears in `text`. Words of any length land in the same
96-dimensional space; words sharing no characters are orthogonal.
"""

from __future__ import annotations

from fractions import Fraction
import math
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from vectmo.text.alphabet import ALPHABET_SIZE, encode


FloatArray = NDArray[np.float64]


def embed(text: str) -> FloatArray:
    """Return the 96-slot character histogram of `text` as float64."""

    indices = encode(text)
    indices = indices[indices >= 0]
    return np.bincount(indices, minlength=ALPHABET_SIZE).astype(np.float64)


def embed_many(words: Iterable[str]) -> FloatArray:
    """Stack the embeddings of `words` into an `(n, ALPHABET_SIZE)` matrix."""

    rows = [embed(word) for word in words]
    if not rows:
        return np.zeros((0, ALPHABET_SIZE), dtype=np.float64)
    return np.vstack(rows)


def _check_shape(vec: FloatArray) -> None:
    if vec.shape != (ALPHABET_SIZE,):
        raise ValueError(f"Expected an embedding of shape ({ALPHABET_SIZE},), got {vec.shape}.")


def dot(a: FloatArray, b: FloatArray) -> float:
    _check_shape(a)
    _check_shape(b)
    return float(np.dot(a, b))


def magnitude(a: FloatArray) -> float:
    return math.sqrt(dot(a, a))


def cosine_similarity(a: FloatArray, b: FloatArray) -> float:
    """Return `dot(a, b) / (|a| * |b|)`, or exactly 0.0 if either magnitude is 0.

    The denominator is taken as `sqrt(|a|^2 * |b|^2)` so identical non-zero
    histograms score exactly 1.0.
    """

    norm_sq = dot(a, a) * dot(b, b)
    if norm_sq == 0.0:
        return 0.0
    return dot(a, b) / math.sqrt(norm_sq)


def similarity_rank_keys(query: FloatArray, matrix: FloatArray) -> list[Fraction]:
    """Exact keys ordering the rows of `matrix` by cosine similarity to `query`.

    Histograms hold integer counts, so `dot^2 / |row|^2` is a rational number
    that sorts rows the same way as their cosine (the query norm is shared and
    dots are non-negative). Equal keys mean mathematically equal cosines,
    which float division does not guarantee. Rows with zero magnitude, or any
    row when the query has zero magnitude, get key 0.
    """

    _check_shape(query)
    if matrix.ndim != 2 or matrix.shape[1] != ALPHABET_SIZE:
        raise ValueError(
            f"Expected a matrix of shape (n, {ALPHABET_SIZE}), got {matrix.shape}."
        )
    if not np.any(query):
        return [Fraction(0)] * matrix.shape[0]
    dots = (matrix @ query).astype(np.int64).tolist()
    norms_sq = np.einsum("ij,ij->i", matrix, matrix).astype(np.int64).tolist()
    return [
        Fraction(d * d, n) if n else Fraction(0)
        for d, n in zip(dots, norms_sq)
    ]
