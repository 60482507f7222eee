"""imagegen-edge - Prompt-to-image edge endpoint backed by Workers AI."""

__version__ = "0.1.0"

from imagegen_edge.core.config import EdgeConfig, config
from imagegen_edge.core.inference import InferenceBinding, InferenceError, WorkersAIBinding

__all__ = [
    "EdgeConfig",
    "config",
    "InferenceBinding",
    "InferenceError",
    "WorkersAIBinding",
]
