"""Transition model state, persistence and similarity lookup."""

from vectmo.models.snapshot import TransitionSnapshot
from vectmo.models.transition import TransitionModel, count_transitions

__all__ = [
    "TransitionSnapshot",
    "TransitionModel",
    "count_transitions",
]
