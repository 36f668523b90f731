"""
Pydantic schemas for request/response validation.
"""

from typing import Annotated, List

from pydantic import BaseModel, Field, field_validator

from titanic.features import (
    AGE_RANGE,
    FARE_RANGE,
    PARENTS_RANGE,
    SIBLINGS_RANGE,
    Gender,
    Port,
    TicketClass,
)

Probability = Annotated[float, Field(ge=0.0, le=1.0)]
SliderValue = Annotated[float, Field(allow_inf_nan=False)]


def _snap(value: float, bounds: tuple, step: float) -> float:
    """Clamp to the slider bounds, then snap to the slider step."""
    low, high = bounds
    clamped = min(max(value, low), high)
    return float(round(clamped / step) * step)


class HealthResponse(BaseModel):
    status: str
    model_loaded: bool
    accelerator_available: bool
    version: str = "1.0.0"

    model_config = {"protected_namespaces": ()}


class FormState(BaseModel):
    """
    Current form values. Pickers hold enum members, sliders hold floats.
    Slider values outside their range are clamped, the same way the widgets would.
    """

    ticket_class: TicketClass = TicketClass.FIRST
    gender: Gender = Gender.MAN
    age: SliderValue = 25.0
    siblings_or_spouses: SliderValue = 1.0
    parents_or_children: SliderValue = 1.0
    fare: SliderValue = 32.0
    port: Port = Port.CHERBOURG

    model_config = {
        "validate_assignment": True,
        "json_schema_extra": {
            "examples": [
                {
                    "ticket_class": 1,
                    "gender": "female",
                    "age": 29.0,
                    "siblings_or_spouses": 0,
                    "parents_or_children": 0,
                    "fare": 100.0,
                    "port": "C",
                }
            ]
        }
    }

    @field_validator("age")
    @classmethod
    def clamp_age(cls, v: float) -> float:
        return _snap(v, AGE_RANGE, 0.5)

    @field_validator("siblings_or_spouses")
    @classmethod
    def clamp_siblings(cls, v: float) -> float:
        return _snap(v, SIBLINGS_RANGE, 1)

    @field_validator("parents_or_children")
    @classmethod
    def clamp_parents(cls, v: float) -> float:
        return _snap(v, PARENTS_RANGE, 1)

    @field_validator("fare")
    @classmethod
    def clamp_fare(cls, v: float) -> float:
        return _snap(v, FARE_RANGE, 0.5)


class PredictionResponse(BaseModel):
    label: str          # "Survive" or "Does not survive"
    survived: bool
    confidence: float   # Probability of predicted class (0.0 - 1.0)


class RawModelOutput(BaseModel):
    """What the classifier must return for a single record."""

    predicted_class: int = Field(ge=0, le=1)
    class_probabilities: List[Probability] = Field(min_length=2, max_length=2)
