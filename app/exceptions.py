"""
Error types raised by the prediction pipeline.
"""


class PredictionServiceError(Exception):
    """Base class for prediction pipeline errors."""

    def __init__(self, message: str, **kwargs):
        self.message = message
        self.additional_info = kwargs
        super().__init__(self.message)


class ModelLoadFailure(PredictionServiceError):
    """Raised when the pretrained classifier cannot be loaded or configured."""


class InferenceFailure(PredictionServiceError):
    """Raised when the classifier raises or returns malformed output."""
