"""Tests for the bigram walk, cycle avoidance and vocabulary snapping."""

from __future__ import annotations

import numpy as np
import pytest

from vectmo.generation.engine import GenerationEngine
from vectmo.models.snapshot import TransitionSnapshot
from vectmo.models.transition import TransitionModel
from vectmo.text.alphabet import ALPHABET_SIZE, index_of


def _snapshot(edges: dict[tuple[str, str], int], words: list[str] | None = None) -> TransitionSnapshot:
    counts = np.zeros((ALPHABET_SIZE, ALPHABET_SIZE), dtype=np.int64)
    for (src, dst), count in edges.items():
        counts[index_of(src), index_of(dst)] = count
    return TransitionSnapshot.build(counts, words or [])


def test_single_path_cycle_falls_back_to_forced_moves() -> None:
    engine = GenerationEngine(_snapshot({("a", "b"): 1, ("b", "a"): 1}))
    sequence = engine.generate_raw_sequence("a", 20)

    # Only one path exists, so once every follower closes a cycle the top one is forced.
    assert sequence == ("ab" * 11)[:21]
    assert len(sequence) == 21


def test_cycle_avoidance_takes_alternative_before_repeating() -> None:
    engine = GenerationEngine(
        _snapshot({("a", "b"): 5, ("a", "c"): 1, ("b", "a"): 1, ("c", "a"): 1})
    )
    # "ababab" + "b" would repeat the window "ababab"; the lower-count "c" is taken instead.
    assert engine.generate_raw_sequence("a", 7) == "abababac"


def test_followers_rank_by_count_then_character_code() -> None:
    engine = GenerationEngine(_snapshot({("x", "q"): 2, ("x", "b"): 2, ("x", "z"): 3}))
    assert engine.snapshot.followers("x") == [("z", 3), ("b", 2), ("q", 2)]
    assert engine.generate_raw_sequence("x", 5) == "xz"


def test_generation_stops_without_followers() -> None:
    engine = GenerationEngine(_snapshot({("a", "b"): 1}))
    assert engine.generate_raw_sequence("a", 10) == "ab"
    assert engine.generate_raw_sequence("q", 10) == "q"
    assert engine.generate_raw_sequence("é", 10) == "é"
    assert engine.generate_raw_sequence("a", 0) == "a"


def test_generation_validates_arguments() -> None:
    engine = GenerationEngine(_snapshot({("a", "b"): 1}))
    with pytest.raises(ValueError):
        engine.generate_raw_sequence("ab", 3)
    with pytest.raises(ValueError):
        engine.generate_raw_sequence("", 3)
    with pytest.raises(ValueError):
        engine.generate_raw_sequence("a", -1)
    with pytest.raises(ValueError):
        GenerationEngine(_snapshot({}), cycle_window=0)


def test_snap_preserves_runs_of_spaces() -> None:
    engine = GenerationEngine(_snapshot({}, ["cat", "can"]))
    assert engine.snap_to_vocabulary("xzzz  cnn") == "can  can"
    assert engine.snap_to_vocabulary(" tac ") == " cat "
    assert engine.snap_to_vocabulary("   ") == "   "
    assert engine.snap_to_vocabulary("") == ""


def test_snap_without_vocabulary_is_identity() -> None:
    engine = GenerationEngine(_snapshot({("a", "b"): 1}))
    assert engine.snap_to_vocabulary("xzzz  cnn ") == "xzzz  cnn "


def test_snap_splits_on_literal_spaces_only() -> None:
    engine = GenerationEngine(_snapshot({}, ["ab", "cd"]), debug=True)
    # Newlines stay inside a fragment and count toward its histogram.
    # Equal scores and lengths: the first word in sorted order wins.
    assert engine.snap_to_vocabulary("ab\ncd") == "ab"
    assert engine.snap_to_vocabulary("dc ba") == "cd ab"


def test_end_to_end_prediction_is_deterministic() -> None:
    model = TransitionModel().train("cat can run cat run")
    engine = GenerationEngine(model.snapshot)

    first = engine.generate_raw_sequence("n", 10)
    second = GenerationEngine(model.snapshot).generate_raw_sequence("n", 10)

    assert first == second == "n cat cat r"
    assert engine.snap_to_vocabulary(first[1:]) == " cat cat run"


def test_engine_does_not_mutate_model() -> None:
    model = TransitionModel().train("cat can run cat run")
    counts_before = model.snapshot.counts.copy()
    vocabulary_before = model.vocabulary

    engine = GenerationEngine(model.snapshot)
    engine.snap_to_vocabulary(engine.generate_raw_sequence("c", 40)[1:])

    np.testing.assert_array_equal(model.snapshot.counts, counts_before)
    assert model.vocabulary == vocabulary_before
