"""Character-level sequence prediction with vocabulary snapping."""

from vectmo.config import VectmoConfig
from vectmo.generation.engine import GenerationEngine
from vectmo.models.snapshot import TransitionSnapshot
from vectmo.models.transition import TransitionModel
from vectmo.predictor import TextPredictor
from vectmo.results import OperationResult, PredictionResult, SimilarityMatch, Status

__all__ = [
    "VectmoConfig",
    "GenerationEngine",
    "TransitionSnapshot",
    "TransitionModel",
    "TextPredictor",
    "OperationResult",
    "PredictionResult",
    "SimilarityMatch",
    "Status",
]
