"""
Feature encoding for the Titanic survival classifier.
Turns a snapshot of form values into the record the classifier was trained on.
"""

import math
from dataclasses import dataclass
from enum import Enum


class TicketClass(int, Enum):
    FIRST = 1
    SECOND = 2
    THIRD = 3


class Gender(str, Enum):
    MAN = "male"
    WOMAN = "female"


class Port(str, Enum):
    # C = Cherbourg, Q = Queenstown, S = Southampton
    CHERBOURG = "C"
    QUEENSTOWN = "Q"
    SOUTHAMPTON = "S"


# ── Form domains ──────────────────────────────────────────────────────────────
AGE_RANGE = (0.0, 80.0)
SIBLINGS_RANGE = (0, 8)
PARENTS_RANGE = (0, 6)
FARE_RANGE = (0.0, 512.0)


@dataclass(frozen=True)
class PassengerFeatures:
    """One passenger, exactly as the classifier expects it."""

    ticket_class: int
    gender: str
    age: float
    siblings_or_spouses_aboard: int
    parents_or_children_aboard: int
    fare_amount: float
    embarkation_port: str

    def as_model_record(self) -> dict:
        """Column names used when the classifier was trained."""
        return {
            "Pclass": self.ticket_class,
            "Sex": self.gender,
            "Age": self.age,
            "SibSp": self.siblings_or_spouses_aboard,
            "Parch": self.parents_or_children_aboard,
            "Fare": self.fare_amount,
            "Embarked": self.embarkation_port,
        }


def _code(value) -> str:
    return value.value if isinstance(value, Enum) else value


def encode(
    ticket_class,
    gender,
    age: float,
    siblings_or_spouses: float,
    parents_or_children: float,
    fare: float,
    port,
) -> PassengerFeatures:
    """
    Build a PassengerFeatures from form values.

    Counts arrive as slider floats and are truncated to whole numbers.
    Gender and port are kept as their short codes ("male"/"female", "C"/"Q"/"S").
    """
    return PassengerFeatures(
        ticket_class=math.floor(_code(ticket_class)),
        gender=_code(gender),
        age=float(age),
        siblings_or_spouses_aboard=math.floor(siblings_or_spouses),
        parents_or_children_aboard=math.floor(parents_or_children),
        fare_amount=float(fare),
        embarkation_port=_code(port),
    )
