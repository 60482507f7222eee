"""Inference bindings for the hosted image-generation model.

This module provides :class:`InferenceBinding`, the interface the API layer
awaits to turn a parameter bag into image bytes, and
:class:`WorkersAIBinding`, its implementation over the Cloudflare Workers AI
REST API.

Key Responsibilities
--------------------
- **Request assembly** - the run URL is built from the configured account and
  model identifier; the parameter bag is sent as the JSON body, unmodified.
- **Response handling** - text-to-image models answer with raw image bytes.
  Some models answer with a JSON envelope holding a base64 ``image`` field,
  which is decoded.  A JSON envelope with ``success: false`` is an error.
- **Error translation** - HTTP status failures, transport failures and missing
  credentials all surface as :class:`InferenceError` so the API layer has one
  exception to map.

No retries are attempted and no timeout is applied unless
``EdgeConfig.request_timeout`` is set.

Usage
-----
::

    from imagegen_edge.core.config import config
    from imagegen_edge.core.inference import WorkersAIBinding

    binding = WorkersAIBinding(config)
    png = await binding.run(config.model_id, {"prompt": "a red fox", "seed": 7})
    await binding.aclose()
"""

from __future__ import annotations

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from imagegen_edge.core.config import EdgeConfig

logger = logging.getLogger(__name__)


class InferenceError(RuntimeError):
    """Raised when the hosted model cannot produce an image.

    Attributes:
        status_code: Upstream HTTP status, or ``None`` when the request never
            got a response (transport failure, missing credentials).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InferenceBinding(ABC):
    """Async interface to a hosted image-generation model."""

    @abstractmethod
    async def run(self, model: str, inputs: dict[str, Any]) -> bytes:
        """Invoke *model* with *inputs* and return the raw output bytes.

        Raises:
            InferenceError: If the model call fails.
        """

    async def aclose(self) -> None:
        """Release any resources held by the binding."""


class WorkersAIBinding(InferenceBinding):
    """Binding that runs models through the Workers AI REST API.

    Attributes:
        _config (EdgeConfig):
            Supplies account ID, API token, base URL and timeout.
        _client (httpx.AsyncClient):
            Shared HTTP client.  Created here unless one is injected.
        _owns_client (bool):
            Whether :meth:`aclose` should close ``_client``.
    """

    def __init__(self, config: EdgeConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.request_timeout)

    def _headers(self) -> dict[str, str]:
        if not self._config.account_id or self._config.api_token is None:
            raise InferenceError(
                "Workers AI credentials are not configured "
                "(set IMAGEGEN_ACCOUNT_ID and IMAGEGEN_API_TOKEN)"
            )
        return {"Authorization": f"Bearer {self._config.api_token.get_secret_value()}"}

    async def run(self, model: str, inputs: dict[str, Any]) -> bytes:
        """Send *inputs* to ``ai/run/{model}`` and return the image bytes.

        Args:
            model: Workers AI model identifier.
            inputs: Parameter bag; forwarded as the JSON body unchanged.

        Returns:
            The bytes the model produced.  They are not checked to be a
            valid image.

        Raises:
            InferenceError: On missing credentials, transport failure,
                non-2xx status, an unsuccessful JSON envelope, or a JSON
                envelope without image data.
        """
        headers = self._headers()
        url = self._config.run_url(model)

        logger.info(f"Running model '{model}' with inputs: {sorted(inputs)}")

        try:
            response = await self._client.post(url, json=inputs, headers=headers)
        except httpx.RequestError as exc:
            raise InferenceError(f"Request to Workers AI failed: {exc}") from exc

        if response.is_error:
            raise InferenceError(
                f"Workers AI returned status {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        content_type = response.headers.get("content-type", "")
        if content_type.startswith("application/json"):
            return self._decode_envelope(response)

        logger.info(f"Model '{model}' returned {len(response.content)} bytes ({content_type}).")
        return response.content

    @staticmethod
    def _decode_envelope(response: httpx.Response) -> bytes:
        """Extract image bytes from a JSON ``{"success", "result", "errors"}`` envelope."""
        payload = response.json()

        if not payload.get("success", True):
            errors = payload.get("errors") or []
            message = "; ".join(str(e.get("message", e)) for e in errors) or "unknown error"
            raise InferenceError(
                f"Workers AI reported failure: {message}",
                status_code=response.status_code,
            )

        result = payload.get("result") or {}
        image = result.get("image") if isinstance(result, dict) else None
        if not image:
            raise InferenceError(
                "Workers AI response contained no image data",
                status_code=response.status_code,
            )

        try:
            return base64.b64decode(image, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise InferenceError(
                "Workers AI returned malformed base64 image data",
                status_code=response.status_code,
            ) from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
