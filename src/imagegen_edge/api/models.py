"""Pydantic request model for the Image Generator endpoint.

Models
------
GenerateImageRequest
    Payload for ``POST /generate-image`` - a required prompt plus the
    optional generation knobs forwarded to the inference binding.

The optional fields are deliberately typed ``Any``: the hosted model owns
range and type checking, so values are passed through exactly as the client
sent them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Order matches the HTML form and the provider's input schema.
OPTIONAL_FIELDS: tuple[str, ...] = (
    "negative_prompt",
    "height",
    "width",
    "num_steps",
    "guidance",
    "strength",
    "seed",
)


def _is_blank(value: Any) -> bool:
    """Return ``True`` for the scalar values a form submits for an empty input."""
    if value is None or isinstance(value, str):
        return not value
    if isinstance(value, (bool, int, float)):
        return value == 0
    return False


class GenerateImageRequest(BaseModel):
    """Request body for the ``POST /generate-image`` endpoint.

    Attributes:
        prompt: Text description of the image.  Required; must contain at
            least one non-whitespace character.
        negative_prompt: Elements the model should avoid.
        height: Output height in pixels (provider accepts 256-2048).
        width: Output width in pixels (provider accepts 256-2048).
        num_steps: Diffusion steps (provider maximum is 20).
        guidance: Classifier-free guidance scale.
        strength: Transformation strength for image-to-image (0-1).
        seed: Random seed.  Absent means the provider picks one.
    """

    model_config = ConfigDict(extra="ignore")

    prompt: str | None = Field(
        default=None,
        description="Text description of the image to generate.",
    )
    negative_prompt: Any = Field(default=None, description="Elements to avoid.")
    height: Any = Field(default=None, description="Image height in pixels.")
    width: Any = Field(default=None, description="Image width in pixels.")
    num_steps: Any = Field(default=None, description="Number of diffusion steps.")
    guidance: Any = Field(default=None, description="Guidance scale.")
    strength: Any = Field(default=None, description="Strength (0-1).")
    seed: Any = Field(default=None, description="Random seed.")

    @property
    def has_prompt(self) -> bool:
        """``True`` when the prompt contains non-whitespace text."""
        return bool(self.prompt and self.prompt.strip())

    def to_inputs(self) -> dict[str, Any]:
        """Build the parameter bag sent to the inference binding.

        The prompt is forwarded untrimmed.  Optional fields that are missing
        or blank (``None``, ``""``, ``0``, ``False``) are left out so the
        provider applies its own defaults.  Empty lists and objects are not
        blank and are forwarded; every value keeps the type it arrived with.

        Returns:
            Dictionary with ``prompt`` and any present optional fields.
        """
        inputs: dict[str, Any] = {"prompt": self.prompt}
        for name in OPTIONAL_FIELDS:
            value = getattr(self, name)
            if not _is_blank(value):
                inputs[name] = value
        return inputs
