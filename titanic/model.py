"""
Model definition for Titanic survival classification.
A small feed-forward network over the encoded passenger record with a
two-class output head: index 0 = survives, index 1 = does not survive.
"""

import torch
import torch.nn as nn

from titanic.features import Gender, PassengerFeatures, Port

PORT_CODES = [p.value for p in Port]  # One-hot order: C, Q, S
NUM_FEATURES = 6 + len(PORT_CODES)
CLASSES = ["survives", "does_not_survive"]


class TitanicSurvivalClassifier(nn.Module):
    """Tabular classifier returning raw logits for both classes."""

    def __init__(self, hidden_size: int = 16, dropout: float = 0.2):
        super().__init__()
        self.net = nn.Sequential(
            nn.Linear(NUM_FEATURES, hidden_size),
            nn.ReLU(),
            nn.Dropout(p=dropout),
            nn.Linear(hidden_size, len(CLASSES)),
        )

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.net(x)  # Returns raw logits, shape [batch, 2]


def record_to_tensor(record: PassengerFeatures) -> torch.Tensor:
    """Vectorize one record into a [1, NUM_FEATURES] float tensor."""
    row = record.as_model_record()
    if row["Sex"] not in (Gender.MAN.value, Gender.WOMAN.value):
        raise ValueError(f"Unknown gender code: {row['Sex']!r}")
    if row["Embarked"] not in PORT_CODES:
        raise ValueError(f"Unknown embarkation port: {row['Embarked']!r}")

    port_one_hot = [1.0 if row["Embarked"] == code else 0.0 for code in PORT_CODES]
    values = [
        float(row["Pclass"]),
        1.0 if row["Sex"] == Gender.WOMAN.value else 0.0,
        float(row["Age"]),
        float(row["SibSp"]),
        float(row["Parch"]),
        float(row["Fare"]),
        *port_one_hot,
    ]
    return torch.tensor([values], dtype=torch.float32)


def get_model(hidden_size: int = 16) -> TitanicSurvivalClassifier:
    """Factory function to create and return the model."""
    return TitanicSurvivalClassifier(hidden_size=hidden_size)


def load_model(checkpoint_path: str, device: str = "cpu") -> TitanicSurvivalClassifier:
    """Load a model from a saved checkpoint file."""
    state = torch.load(checkpoint_path, map_location=device)
    # Support both raw state_dict and checkpoint dict
    if isinstance(state, dict) and "model_state_dict" in state:
        hidden_size = state.get("hidden_size", 16)
        state = state["model_state_dict"]
    else:
        hidden_size = 16
    model = TitanicSurvivalClassifier(hidden_size=hidden_size)
    model.load_state_dict(state)
    model.to(device)
    model.eval()
    return model
