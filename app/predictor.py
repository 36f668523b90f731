"""
Model loading and inference logic.
The classifier is loaded once at app startup and owned by a PredictionService,
which gates every request on hardware capability and serializes model access.
"""

import asyncio
import inspect
import logging
import os
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

import torch
from pydantic import ValidationError

from app.capability import has_accelerated_inference_device, select_device
from app.exceptions import InferenceFailure, ModelLoadFailure
from app.schemas import RawModelOutput
from titanic.features import PassengerFeatures
from titanic.model import TitanicSurvivalClassifier, load_model, record_to_tensor

MODEL_PATH = os.getenv("MODEL_PATH", "models/titanic_survival_model.pt")

SURVIVED_CLASS = 0  # Training convention
DID_NOT_SURVIVE_CLASS = 1
LABELS = {SURVIVED_CLASS: "Survive", DID_NOT_SURVIVE_CLASS: "Does not survive"}

logger = logging.getLogger(__name__)

InferFn = Callable[[PassengerFeatures], Union[dict, Awaitable[dict]]]


@dataclass(frozen=True)
class PredictionOutcome:
    survived: bool
    confidence: float

    @property
    def label(self) -> str:
        return LABELS[SURVIVED_CLASS if self.survived else DID_NOT_SURVIVE_CLASS]


class Unavailable:
    """Returned when no accelerated inference device is present."""

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = Unavailable()


class ClassifierHandle:
    """Wraps the torch model for single-record inference."""

    def __init__(self, model_path: str = MODEL_PATH):
        self.device = select_device()
        self.model = self._load_model(model_path)

    def _load_model(self, path: str) -> TitanicSurvivalClassifier:
        try:
            return load_model(path, device=self.device)
        except Exception as e:
            raise ModelLoadFailure(f"Failed to load model from {path}: {e}", path=path) from e

    @torch.no_grad()
    def infer(self, record: PassengerFeatures) -> dict:
        """
        Given one encoded passenger, return the class and both probabilities.

        Returns:
            {
                "predicted_class": 0 | 1,
                "class_probabilities": [p_survives, p_does_not_survive],
            }
        """
        tensor = record_to_tensor(record).to(self.device)
        logits = self.model(tensor)                        # shape: [1, 2]
        probs = torch.softmax(logits, dim=1).squeeze(0).cpu().tolist()
        return {
            "predicted_class": int(torch.argmax(logits, dim=1).item()),
            "class_probabilities": probs,
        }


def map_output(raw) -> PredictionOutcome:
    """Turn raw classifier output into a PredictionOutcome."""
    try:
        output = RawModelOutput.model_validate(raw)
    except ValidationError as e:
        raise InferenceFailure(f"Malformed model output: {raw!r}") from e
    confidence = output.class_probabilities[output.predicted_class]
    return PredictionOutcome(
        survived=output.predicted_class == SURVIVED_CLASS,
        confidence=confidence,
    )


class PredictionService:
    """
    Single owner of the classifier.

    predict() accepts concurrent callers but runs the model one call at a time.
    """

    def __init__(
        self,
        infer: Optional[InferFn] = None,
        capability_check: Callable[[], bool] = has_accelerated_inference_device,
        load_error: Optional[ModelLoadFailure] = None,
    ):
        if infer is None and load_error is None:
            raise ValueError("PredictionService needs a model or a load error")
        self._infer = infer
        self._capability_check = capability_check
        self._load_error = load_error
        self._lock = asyncio.Lock()

    @classmethod
    def load(
        cls,
        model_path: str = MODEL_PATH,
        capability_check: Callable[[], bool] = has_accelerated_inference_device,
    ) -> "PredictionService":
        """Load the classifier; on failure the service is returned unusable."""
        try:
            handle = ClassifierHandle(model_path)
        except ModelLoadFailure as e:
            logger.error(f"Failed to load model: {e}")
            return cls(capability_check=capability_check, load_error=e)
        logger.info(f"Model loaded from {model_path} on {handle.device}")
        return cls(infer=handle.infer, capability_check=capability_check)

    @property
    def loaded(self) -> bool:
        return self._load_error is None

    def accelerator_available(self) -> bool:
        """Capability check used to gate predict(); evaluated on every call."""
        return self._capability_check()

    @property
    def load_error(self) -> Optional[ModelLoadFailure]:
        return self._load_error

    async def predict(self, features: PassengerFeatures) -> Union[PredictionOutcome, Unavailable]:
        if self._load_error is not None:
            raise self._load_error

        if not self.accelerator_available():
            logger.warning("No accelerated inference device, prediction unavailable")
            return UNAVAILABLE

        async with self._lock:
            try:
                raw = await self._run_model(features)
            except Exception as e:
                logger.error(f"Inference failed: {e}")
                raise InferenceFailure(f"Model invocation failed: {e}") from e

        return map_output(raw)

    async def _run_model(self, features: PassengerFeatures):
        if inspect.iscoroutinefunction(self._infer):
            return await self._infer(features)
        return await asyncio.to_thread(self._infer, features)
