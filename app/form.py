"""
Form controller: the single entry point between form widgets and the
prediction pipeline.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Optional

from app.exceptions import InferenceFailure, ModelLoadFailure
from app.predictor import PredictionOutcome, PredictionService, Unavailable
from app.schemas import FormState
from titanic.features import encode

UNAVAILABLE_MESSAGE = "prediction unavailable — hardware capability missing"
FAILURE_MESSAGE = "model initialization/inference failed"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayResult:
    """What the form shows: a prediction or an error notice, never both."""

    prediction: Optional[str] = None
    survived: Optional[bool] = None
    certainty: Optional[float] = None
    error: Optional[str] = None
    unavailable: bool = False

    @classmethod
    def from_outcome(cls, outcome: PredictionOutcome) -> "DisplayResult":
        return cls(prediction=outcome.label, survived=outcome.survived, certainty=outcome.confidence)

    @classmethod
    def failure(cls, message: str) -> "DisplayResult":
        return cls(error=message)

    @classmethod
    def capability_missing(cls) -> "DisplayResult":
        return cls(error=UNAVAILABLE_MESSAGE, unavailable=True)

    @property
    def is_error(self) -> bool:
        return self.error is not None


async def submit_prediction(service: PredictionService, form_state: FormState) -> DisplayResult:
    """Snapshot the form, run one prediction and map it to display values."""
    snapshot = form_state.model_copy()
    features = encode(
        snapshot.ticket_class,
        snapshot.gender,
        snapshot.age,
        snapshot.siblings_or_spouses,
        snapshot.parents_or_children,
        snapshot.fare,
        snapshot.port,
    )
    try:
        result = await service.predict(features)
    except (ModelLoadFailure, InferenceFailure) as e:
        logger.info(f"submit | error={type(e).__name__}")
        return DisplayResult.failure(FAILURE_MESSAGE)

    if isinstance(result, Unavailable):
        return DisplayResult.capability_missing()
    return DisplayResult.from_outcome(result)


class PredictionForm:
    """
    Holds the form values and the currently displayed result for one session.

    Results are displayed last-submitted-wins: a request that finishes after a
    newer one has already been displayed is dropped.
    """

    def __init__(self, service: PredictionService, state: Optional[FormState] = None):
        self.service = service
        self.state = state or FormState()
        self.display: Optional[DisplayResult] = None
        self._tickets = itertools.count(1)
        self._shown_ticket = 0

        if not service.loaded:
            self.display = DisplayResult.failure(FAILURE_MESSAGE)

    async def submit(self) -> DisplayResult:
        ticket = next(self._tickets)
        result = await submit_prediction(self.service, self.state)
        if ticket > self._shown_ticket:
            self._shown_ticket = ticket
            self.display = result
        else:
            logger.debug(f"submit | dropping stale result for request {ticket}")
        return result

    def dismiss(self) -> None:
        """Close the error notice, if one is shown."""
        if self.display is not None and self.display.is_error:
            self.display = None
