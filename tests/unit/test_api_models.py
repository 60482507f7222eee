"""Tests for imagegen_edge.api.models - the generation request model.

Tests cover:
- Prompt presence checks (missing, blank, whitespace-only).
- Parameter bag construction and falsy-value omission.
- Pass-through of unvalidated optional values.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from imagegen_edge.api.models import OPTIONAL_FIELDS, GenerateImageRequest


class TestPrompt:
    """Test GenerateImageRequest.has_prompt."""

    def test_valid_prompt(self):
        req = GenerateImageRequest(prompt="a cat")
        assert req.has_prompt is True

    @pytest.mark.parametrize("prompt", [None, "", " ", "\t\n "])
    def test_blank_prompt(self, prompt):
        """Missing or whitespace-only prompts do not count."""
        req = GenerateImageRequest(prompt=prompt)
        assert req.has_prompt is False

    def test_prompt_defaults_to_none(self):
        assert GenerateImageRequest().prompt is None

    def test_non_string_prompt_rejected(self):
        """Numbers are not coerced to prompt text."""
        with pytest.raises(ValidationError):
            GenerateImageRequest.model_validate({"prompt": 123})


class TestToInputs:
    """Test GenerateImageRequest.to_inputs parameter bag construction."""

    def test_prompt_only(self):
        req = GenerateImageRequest(prompt="a cat")
        assert req.to_inputs() == {"prompt": "a cat"}

    def test_all_fields(self):
        """Populated fields are forwarded with their original types."""
        data = {
            "prompt": "a cat",
            "negative_prompt": "blurry",
            "height": 512,
            "width": 512,
            "num_steps": 10,
            "guidance": 7.5,
            "strength": 0.8,
            "seed": 42,
        }
        assert GenerateImageRequest.model_validate(data).to_inputs() == data

    @pytest.mark.parametrize("value", [None, "", 0, 0.0, False])
    def test_falsy_optional_values_omitted(self, value):
        """Falsy values leave the field to the provider's default."""
        req = GenerateImageRequest.model_validate({"prompt": "a cat", "seed": value, "guidance": value})
        assert req.to_inputs() == {"prompt": "a cat"}

    @pytest.mark.parametrize("value", [[], {}, [512], {"a": 1}])
    def test_containers_forwarded_even_when_empty(self, value):
        """Lists and objects are never treated as blank, empty or not."""
        req = GenerateImageRequest.model_validate({"prompt": "a cat", "strength": value})
        assert req.to_inputs() == {"prompt": "a cat", "strength": value}

    def test_strings_not_coerced(self):
        """A numeric string stays a string."""
        req = GenerateImageRequest.model_validate({"prompt": "a cat", "height": "512"})
        assert req.to_inputs()["height"] == "512"

    def test_extra_keys_dropped(self):
        req = GenerateImageRequest.model_validate({"prompt": "a cat", "batch_size": 4})
        assert "batch_size" not in req.to_inputs()

    def test_optional_fields_match_model(self):
        """Every optional field name is a model field."""
        for name in OPTIONAL_FIELDS:
            assert name in GenerateImageRequest.model_fields
