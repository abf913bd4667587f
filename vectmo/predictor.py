"""Working-file pipeline: pretrain a model to disk, then predict continuations.

`TextPredictor` is the programmatic surface a front end (terminal loop, script,
service) drives:

1. `set_working_file(name)` chooses the base path of the persisted model.
2. `pretrain(text)` trains, saves `<name>.txt` / `<name>.words` and, unless
   disabled, the `<name>.vec` corpus histogram.
3. `predict(text)` seeds generation with the last character of `text`,
   loading the persisted model first if nothing is in memory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from vectmo.config import VectmoConfig
from vectmo.generation.engine import GenerationEngine
from vectmo.models import persistence
from vectmo.models.transition import TransitionModel
from vectmo.results import OperationResult, PredictionResult, Status


class TextPredictor:
    """Train-once, predict-many facade over `TransitionModel` and `GenerationEngine`."""

    def __init__(
        self,
        config: VectmoConfig | None = None,
        *,
        model: TransitionModel | None = None,
    ) -> None:
        self.config = config if config is not None else VectmoConfig()
        self.config.validate()
        self.model = (
            model
            if model is not None
            else TransitionModel(
                debug=self.config.debug,
                debug_max_messages=self.config.debug_max_messages,
            )
        )
        self._base_path: Path | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def base_path(self) -> Path | None:
        return self._base_path

    def set_working_file(self, name: str | Path) -> OperationResult:
        """Set the base path used by `pretrain`, `predict` and `create_working_file`."""

        if isinstance(name, Path):
            name = str(name)
        if name in ("", "."):
            self._logger.error("A working file name is required.")
            return OperationResult(Status.NOT_CONFIGURED, "working file name is empty")
        self._base_path = Path(name)
        return OperationResult(Status.OK)

    def create_working_file(self) -> OperationResult:
        """Create (or truncate) the adjacency file at the configured base path."""

        if self._base_path is None:
            return OperationResult(Status.NOT_CONFIGURED, "no working file set")
        path = persistence.adjacency_path(self._base_path)
        try:
            path.write_text("", encoding="ascii")
        except OSError as exc:
            self._logger.warning("Could not create %s: %s", path, exc)
            return OperationResult(Status.IO_FAILURE, str(exc))
        return OperationResult(Status.OK, str(path))

    def pretrain(self, text: str) -> OperationResult:
        """Train on `text` and persist the model next to the working file."""

        if self._base_path is None:
            self._logger.error("No working file set; call set_working_file() first.")
            return OperationResult(Status.NOT_CONFIGURED, "no working file set")
        if not text:
            return OperationResult(Status.NO_INPUT, "no training text provided")

        self.model.train(text)
        result = self.model.save(self._base_path)
        if not result:
            return result

        embedding = self.model.corpus_embedding
        if self.config.write_corpus_embedding and embedding is not None:
            vec_path = persistence.corpus_embedding_path(self._base_path)
            try:
                persistence.write_corpus_embedding(vec_path, embedding)
            except OSError as exc:
                self._logger.warning("Could not write corpus embedding %s: %s", vec_path, exc)
                return OperationResult(Status.IO_FAILURE, str(exc))
            self._logger.info("Corpus embedding written to %s", vec_path)
        return result

    def _ensure_model(self) -> Status:
        if self.model.is_trained():
            return Status.OK
        if self._base_path is None:
            return Status.NOT_CONFIGURED
        loaded = self.model.load(self._base_path)
        if not loaded:
            return Status.UNTRAINED
        return Status.OK

    def predict(self, text: str, max_chars: int | None = None) -> PredictionResult:
        """Generate a vocabulary-snapped continuation of `text`."""

        if not text:
            return PredictionResult(Status.NO_INPUT)
        steps = self.config.max_chars if max_chars is None else int(max_chars)
        if steps < 0:
            raise ValueError("max_chars must be non-negative.")

        status = self._ensure_model()
        if status is not Status.OK:
            return PredictionResult(status)

        seed = text[-1]
        engine = GenerationEngine(
            self.model.snapshot,
            cycle_window=self.config.cycle_window,
            debug=self.config.debug,
            debug_max_messages=self.config.debug_max_messages,
        )
        self._logger.debug("Seed character: %r (0x%02x)", seed, ord(seed))

        sequence = engine.generate_raw_sequence(seed, steps)
        if len(sequence) <= 1:
            return PredictionResult(Status.NO_CONTINUATION, seed=seed)

        raw = sequence[1:]
        self._logger.debug("Raw bigram output: %r", raw)
        if not engine.snapshot.vocabulary:
            return PredictionResult(
                Status.OK, seed=seed, raw=raw, text=raw, snap_status=Status.NO_MATCH
            )
        snapped = engine.snap_to_vocabulary(raw)
        return PredictionResult(Status.OK, seed=seed, raw=raw, text=snapped)
