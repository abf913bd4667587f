"""Sequence generation over a trained transition snapshot."""

from vectmo.generation.engine import GenerationEngine

__all__ = ["GenerationEngine"]
