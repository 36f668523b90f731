"""
Shared fixtures: a call-counting stub classifier and capability switches.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


class SpyModel:
    """Stub classifier returning a fixed output and counting calls."""

    def __init__(self, predicted_class=0, class_probabilities=(0.82, 0.18), error=None):
        self.output = {
            "predicted_class": predicted_class,
            "class_probabilities": list(class_probabilities),
        }
        self.error = error
        self.calls = []

    def __call__(self, record):
        self.calls.append(record)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def make_spy():
    """Factory for SpyModel instances."""
    return SpyModel


@pytest.fixture
def female_first_class():
    """Form values of a 29 year old woman in first class from Cherbourg."""
    return {
        "ticket_class": 1,
        "gender": "female",
        "age": 29.0,
        "siblings_or_spouses": 0,
        "parents_or_children": 0,
        "fare": 100.0,
        "port": "C",
    }
