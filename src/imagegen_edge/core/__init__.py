"""Core functionality for the image generation endpoint.

- **EdgeConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)
- **InferenceBinding**: Async interface to the hosted image-generation model
- **WorkersAIBinding**: Binding that calls the Workers AI REST API
- **InferenceError**: Raised by bindings when the upstream call fails

Model inference itself never runs in this process.  The binding forwards a
parameter bag to the provider and hands back whatever bytes it returns.

Usage Example
-------------
    from imagegen_edge.core import WorkersAIBinding, config

    binding = WorkersAIBinding(config)
    png = await binding.run(config.model_id, {"prompt": "a lighthouse at dusk"})
    await binding.aclose()
"""

from imagegen_edge.core.config import EdgeConfig, config
from imagegen_edge.core.inference import InferenceBinding, InferenceError, WorkersAIBinding

__all__ = [
    "EdgeConfig",
    "config",
    "InferenceBinding",
    "InferenceError",
    "WorkersAIBinding",
]
