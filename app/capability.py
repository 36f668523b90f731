"""
Hardware capability checks for inference.
"""

import torch


def has_accelerated_inference_device() -> bool:
    """True when a CUDA GPU or an Apple MPS device is usable. Never cached."""
    if torch.cuda.is_available():
        return True
    mps = getattr(torch.backends, "mps", None)
    return mps is not None and mps.is_available()


def select_device() -> torch.device:
    if torch.cuda.is_available():
        return torch.device("cuda")
    if has_accelerated_inference_device():
        return torch.device("mps")
    return torch.device("cpu")
