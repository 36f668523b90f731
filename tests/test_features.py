"""
Unit tests for titanic/features.py.
Tests: encode, PassengerFeatures.as_model_record
"""

import itertools

import pytest

from titanic.features import Gender, PassengerFeatures, Port, TicketClass, encode


class TestEncodeCategorical:
    @pytest.mark.parametrize(
        "ticket_class,gender,port",
        list(itertools.product([1, 2, 3], ["male", "female"], ["C", "Q", "S"])),
    )
    def test_codes_pass_through(self, ticket_class, gender, port):
        """Class, gender and port should come out exactly as given."""
        features = encode(ticket_class, gender, 30.0, 1.0, 0.0, 15.5, port)
        assert features.ticket_class == ticket_class
        assert features.gender == gender
        assert features.embarkation_port == port

    def test_enum_members_reduced_to_codes(self):
        """Picker enums should be encoded as their raw codes."""
        features = encode(TicketClass.SECOND, Gender.WOMAN, 4.5, 1.0, 2.0, 26.0, Port.SOUTHAMPTON)
        assert features.ticket_class == 2
        assert type(features.ticket_class) is int
        assert features.gender == "female"
        assert type(features.gender) is str
        assert features.embarkation_port == "S"


class TestEncodeNumeric:
    def test_counts_are_whole_numbers(self):
        """Slider floats for family counts should become ints."""
        features = encode(3, "male", 22.0, 1.0, 0.0, 7.25, "S")
        assert features.siblings_or_spouses_aboard == 1
        assert features.parents_or_children_aboard == 0
        assert isinstance(features.siblings_or_spouses_aboard, int)
        assert isinstance(features.parents_or_children_aboard, int)

    def test_counts_truncate_down(self):
        """Off-step slider values should truncate to the lower integer."""
        features = encode(3, "male", 22.0, 2.9, 5.99, 7.25, "S")
        assert features.siblings_or_spouses_aboard == 2
        assert features.parents_or_children_aboard == 5

    def test_age_and_fare_unchanged(self):
        """Age and fare should pass through as floats."""
        features = encode(1, "female", 38.5, 1.0, 0.0, 71.5, "C")
        assert features.age == 38.5
        assert features.fare_amount == 71.5
        assert isinstance(features.age, float)

    def test_domain_boundaries(self):
        """Encoding should be total at the edges of every slider."""
        low = encode(1, "male", 0.0, 0.0, 0.0, 0.0, "Q")
        high = encode(3, "female", 80.0, 8.0, 6.0, 512.0, "S")
        assert (low.age, low.siblings_or_spouses_aboard, low.fare_amount) == (0.0, 0, 0.0)
        assert (high.age, high.parents_or_children_aboard, high.fare_amount) == (80.0, 6, 512.0)


class TestModelRecord:
    def test_training_column_names(self):
        """The record should use the classifier's training column names."""
        features = PassengerFeatures(1, "female", 29.0, 0, 0, 100.0, "C")
        assert features.as_model_record() == {
            "Pclass": 1,
            "Sex": "female",
            "Age": 29.0,
            "SibSp": 0,
            "Parch": 0,
            "Fare": 100.0,
            "Embarked": "C",
        }

    def test_features_are_immutable(self):
        """A record should not change after it is built."""
        features = encode(1, "male", 25.0, 1.0, 1.0, 32.0, "C")
        with pytest.raises(AttributeError):
            features.age = 40.0
