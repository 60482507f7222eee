"""Shared pytest fixtures for imagegen-edge tests."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest
from fastapi.testclient import TestClient

from imagegen_edge.api.main import app, get_binding
from imagegen_edge.core.config import EdgeConfig
from imagegen_edge.core.inference import InferenceBinding, InferenceError

# PNG signature plus padding; the endpoint never inspects the bytes.
FAKE_PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


class StubBinding(InferenceBinding):
    """Inference binding that records calls and returns canned bytes.

    Attributes:
        calls: ``(model, inputs)`` for every :meth:`run` invocation.
        output: Bytes returned from :meth:`run`.
        error: If set, raised from :meth:`run` instead of returning.
    """

    def __init__(self, output: bytes = FAKE_PNG, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.output = output
        self.error = error

    async def run(self, model: str, inputs: dict[str, Any]) -> bytes:
        self.calls.append((model, inputs))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def test_config(monkeypatch) -> EdgeConfig:
    """Create a configuration with credentials, ignoring the environment and .env.

    Returns:
        EdgeConfig instance for testing
    """
    for name in ("IMAGEGEN_ACCOUNT_ID", "IMAGEGEN_API_TOKEN", "IMAGEGEN_MODEL_ID"):
        monkeypatch.delenv(name, raising=False)
    return EdgeConfig(
        _env_file=None,
        account_id="test-account",
        api_token="test-token",
        api_base_url="https://api.example.test/client/v4",
    )


@pytest.fixture
def fake_png() -> bytes:
    """Bytes returned by the default stub binding."""
    return FAKE_PNG


@pytest.fixture
def stub_binding() -> StubBinding:
    """Binding returning :data:`FAKE_PNG`."""
    return StubBinding()


@pytest.fixture
def failing_binding() -> StubBinding:
    """Binding whose every call raises :class:`InferenceError`."""
    return StubBinding(error=InferenceError("upstream exploded", status_code=500))


@pytest.fixture
def test_client(stub_binding: StubBinding) -> Generator[TestClient, None, None]:
    """FastAPI TestClient with the inference binding replaced by a stub.

    The lifespan is not entered, so no real HTTP client is created.
    """
    app.dependency_overrides[get_binding] = lambda: stub_binding
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
