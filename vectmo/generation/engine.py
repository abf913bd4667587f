"""Greedy bigram walk with cycle avoidance, followed by vocabulary snapping.

Generation behavior:
- Start from a single seed character.
- At each step rank the current character's followers by descending count,
  breaking ties by ascending character code.
- Reject a follower if appending it makes the trailing `cycle_window`
  characters repeat a window that already starts earlier in the sequence.
- Take the first follower that is not rejected. If every follower is
  rejected, take the top-ranked one anyway (the walk may then cycle).
- Stop after `max_chars` steps or when the current character has no followers.

Snapping splits the raw walk on literal spaces and replaces every non-empty
fragment with its nearest vocabulary word, so runs of spaces survive unchanged.
"""

from __future__ import annotations

import logging

from vectmo.config import DEFAULT_CYCLE_WINDOW
from vectmo.models.snapshot import TransitionSnapshot


class GenerationEngine:
    """Stateless generator over a read-only `TransitionSnapshot`."""

    def __init__(
        self,
        snapshot: TransitionSnapshot,
        *,
        cycle_window: int = DEFAULT_CYCLE_WINDOW,
        debug: bool = False,
        debug_max_messages: int = 20,
    ) -> None:
        if cycle_window < 1:
            raise ValueError("cycle_window must be at least 1.")
        if debug_max_messages < 0:
            raise ValueError("debug_max_messages must be non-negative.")
        self.snapshot = snapshot
        self.cycle_window = int(cycle_window)
        self.debug = bool(debug)
        self.debug_max_messages = int(debug_max_messages)
        self._logger = logging.getLogger(__name__)

    def _closes_cycle(self, hypothesis: str) -> bool:
        window = self.cycle_window
        if len(hypothesis) < window:
            return False
        tail_pos = len(hypothesis) - window
        return hypothesis.find(hypothesis[tail_pos:]) < tail_pos

    def generate_raw_sequence(self, seed: str, max_chars: int) -> str:
        """Walk the adjacency table from `seed` for at most `max_chars` steps.

        Returns:
            The generated sequence, with `seed` as its first character.
        """

        if len(seed) != 1:
            raise ValueError(f"seed must be a single character, got {seed!r}.")
        if max_chars < 0:
            raise ValueError("max_chars must be non-negative.")

        sequence = seed
        current = seed
        forced_moves = 0
        for _ in range(max_chars):
            followers = self.snapshot.followers(current)
            if not followers:
                break

            chosen: str | None = None
            for candidate, _count in followers:
                if not self._closes_cycle(sequence + candidate):
                    chosen = candidate
                    break
            if chosen is None:
                chosen = followers[0][0]
                forced_moves += 1

            sequence += chosen
            current = chosen

        if forced_moves and self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "Generation from %r took %d forced moves over %d steps",
                seed,
                forced_moves,
                len(sequence) - 1,
            )
        return sequence

    def snap_to_vocabulary(self, raw: str) -> str:
        """Replace each space-delimited fragment of `raw` with its nearest vocabulary word.

        Empty fragments (leading, trailing or repeated spaces) are kept empty,
        so `" ".join` restores the original spacing. Without a vocabulary every
        fragment is returned unchanged.
        """

        fragments = raw.split(" ")
        messages = 0
        snapped: list[str] = []
        for fragment in fragments:
            if not fragment:
                snapped.append(fragment)
                continue
            match = self.snapshot.find_most_similar_word(fragment)
            if match is None:
                snapped.append(fragment)
                continue
            if (
                self.debug
                and messages < self.debug_max_messages
                and self._logger.isEnabledFor(logging.DEBUG)
            ):
                self._logger.debug("Snapped %r -> %r (cosine=%.6f)", fragment, match.word, match.score)
                messages += 1
            snapped.append(match.word)
        return " ".join(snapped)
