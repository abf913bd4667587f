"""Tests for the fixed alphabet index and histogram embeddings."""

from __future__ import annotations

from fractions import Fraction

import numpy as np
import pytest

from vectmo.text.alphabet import (
    ALPHABET_SIZE,
    INVALID_INDEX,
    SUPPORTED_CHARS,
    char_at,
    encode,
    index_of,
    is_supported,
)
from vectmo.text.embedding import (
    cosine_similarity,
    dot,
    embed,
    embed_many,
    magnitude,
    similarity_rank_keys,
)


def test_alphabet_is_a_bijection_over_96_symbols() -> None:
    assert ALPHABET_SIZE == 96
    assert SUPPORTED_CHARS[0] == "!"
    assert SUPPORTED_CHARS[93] == "~"
    assert SUPPORTED_CHARS[94:] == " \n"

    for char in SUPPORTED_CHARS:
        assert char_at(index_of(char)) == char
    for idx in range(ALPHABET_SIZE):
        assert index_of(char_at(idx)) == idx


def test_unsupported_input_returns_sentinels() -> None:
    for char in ("\t", "\r", "\x00", "é", "☃"):
        assert index_of(char) == INVALID_INDEX
        assert not is_supported(char)
    assert index_of("") == INVALID_INDEX
    assert index_of("ab") == INVALID_INDEX
    assert char_at(-1) is None
    assert char_at(ALPHABET_SIZE) is None
    assert is_supported(" ")
    assert is_supported("\n")


def test_encode_marks_unsupported_characters() -> None:
    indices = encode("a\tb☃")
    assert indices.tolist() == [index_of("a"), INVALID_INDEX, index_of("b"), INVALID_INDEX]
    assert encode("").shape == (0,)


def test_embed_counts_supported_characters_only() -> None:
    vec = embed("cat\tcaté")
    assert vec.shape == (ALPHABET_SIZE,)
    assert vec[index_of("c")] == 2.0
    assert vec[index_of("a")] == 2.0
    assert vec[index_of("t")] == 2.0
    assert float(vec.sum()) == 6.0


def test_embedding_is_additive_over_concatenation() -> None:
    pairs = [("hello", " world\n"), ("", "abc"), ("x\ty", "zé!"), ("aaa", "aaa")]
    for left, right in pairs:
        np.testing.assert_array_equal(embed(left + right), embed(left) + embed(right))


def test_cosine_is_symmetric_bounded_and_exact_on_identity() -> None:
    words = ["cat", "can", "run", "banana", "a", "zzz", "Hello, World!"]
    vectors = [embed(word) for word in words]
    for a in vectors:
        assert cosine_similarity(a, a) == 1.0
        for b in vectors:
            score = cosine_similarity(a, b)
            assert score == cosine_similarity(b, a)
            assert 0.0 <= score <= 1.0


def test_cosine_zero_magnitude_guard() -> None:
    assert cosine_similarity(embed(""), embed("anything")) == 0.0
    assert cosine_similarity(embed("\t\t"), embed("\t\t")) == 0.0


def test_dot_and_magnitude() -> None:
    a = embed("cnn")
    b = embed("can")
    assert dot(a, b) == 3.0
    assert magnitude(a) == pytest.approx(np.sqrt(5.0))
    assert cosine_similarity(a, b) == pytest.approx(3.0 / np.sqrt(15.0))


def test_embedding_shape_is_checked() -> None:
    with pytest.raises(ValueError):
        dot(np.zeros(3), np.zeros(3))


def test_rank_keys_order_rows_like_cosine() -> None:
    words = ["can", "cat", "run", "", "zzz"]
    keys = similarity_rank_keys(embed("cnn"), embed_many(words))
    # dot^2 / |row|^2 for "cnn" (c=1, n=2).
    assert keys == [Fraction(9, 3), Fraction(1, 3), Fraction(4, 3), Fraction(0), Fraction(0)]

    assert similarity_rank_keys(embed(""), embed_many(words)) == [Fraction(0)] * 5


def test_rank_keys_tie_where_float_cosines_differ() -> None:
    # Both cosines equal 1/sqrt(6); float evaluation can round them apart.
    query = embed("bdcc")
    keys = similarity_rank_keys(query, embed_many(["bbb", "dd"]))
    assert keys[0] == keys[1] == Fraction(1)
