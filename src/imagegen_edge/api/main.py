"""imagegen-edge - FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, the two routes, and the ``main()`` CLI function
that launches the uvicorn server.

Architecture
------------
The application is stateless between requests:

- **Configuration** is read once from :data:`~imagegen_edge.core.config.config`.
- **Image generation** is delegated to an
  :class:`~imagegen_edge.core.inference.InferenceBinding` created at startup
  and stored on ``app.state``.  Routes receive it through the
  :func:`get_binding` dependency so tests can substitute a stub.
- **The HTML page** is served as a raw ``HTMLResponse`` for every path other
  than the generation endpoint, whatever the method.  FastAPI's docs and
  OpenAPI routes are disabled so nothing else answers those paths.

Endpoints
---------
========  ====================  ==========================================
Method    Path                  Purpose
========  ====================  ==========================================
POST      ``/generate-image``   Forward a prompt, return ``image/png``
any       any other path        Serve the static HTML page
========  ====================  ==========================================

Error mapping
-------------
- Body is not a JSON object -> 400 ``text/plain``.
- Prompt missing or blank -> 400 ``text/plain`` ``Prompt is required``.
- :class:`~imagegen_edge.core.inference.InferenceError` -> 502 ``text/plain``.

Usage
-----
CLI (installed entry point)::

    imagegen-edge

Direct invocation::

    python -m imagegen_edge.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from pydantic import ValidationError

from imagegen_edge import __version__
from imagegen_edge.api.models import GenerateImageRequest
from imagegen_edge.core.config import config
from imagegen_edge.core.inference import InferenceBinding, InferenceError, WorkersAIBinding

logger = logging.getLogger(__name__)

GENERATE_PATH = "/generate-image"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the inference binding on startup and close it on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.binding = WorkersAIBinding(config)
    logger.info(f"Workers AI binding initialised for model '{config.model_id}'.")

    yield

    await app.state.binding.aclose()
    logger.info("Workers AI binding closed on shutdown.")


app = FastAPI(
    title="imagegen-edge",
    description="Prompt-to-image endpoint backed by a hosted diffusion model.",
    version=__version__,
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


def get_binding(request: Request) -> InferenceBinding:
    """Return the inference binding stored on the application state."""
    return request.app.state.binding


@lru_cache(maxsize=4)
def _load_page(templates_dir: Path) -> str:
    """Read ``index.html`` from *templates_dir* once per directory."""
    return (templates_dir / "index.html").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.post(GENERATE_PATH)
async def generate_image(
    request: Request,
    binding: InferenceBinding = Depends(get_binding),
) -> Response:
    """Generate an image from a JSON prompt.

    This endpoint:

    1. Parses the body as a JSON object.
    2. Requires a non-blank ``prompt``.
    3. Builds the parameter bag, leaving absent fields out.
    4. Awaits the binding with the configured model identifier.
    5. Returns the binding's bytes as ``image/png``.

    Args:
        request: Incoming request; the body is parsed here rather than by
            FastAPI so that validation failures answer 400, not 422.
        binding: Inference binding from :func:`get_binding`.

    Returns:
        ``image/png`` response on success, ``text/plain`` on failure.
    """
    try:
        body = await request.json()
    except ValueError:
        logger.warning("Rejected generation request: body is not valid JSON.")
        return PlainTextResponse("Request body must be a JSON object", status_code=400)

    if not isinstance(body, dict):
        logger.warning(f"Rejected generation request: body is {type(body).__name__}, not an object.")
        return PlainTextResponse("Request body must be a JSON object", status_code=400)

    try:
        req = GenerateImageRequest.model_validate(body)
    except ValidationError:
        req = None

    if req is None or not req.has_prompt:
        logger.warning("Rejected generation request: prompt missing or blank.")
        return PlainTextResponse("Prompt is required", status_code=400)

    inputs = req.to_inputs()

    try:
        image = await binding.run(config.model_id, inputs)
    except InferenceError as e:
        logger.error(f"Image generation failed: {e}", exc_info=True)
        return PlainTextResponse("Image generation failed", status_code=502)

    return Response(content=image, media_type="image/png")


async def index(request: Request) -> HTMLResponse:
    """Serve the static HTML page for every non-generation request.

    Reads ``index.html`` from ``config.templates_dir``.  Answers any
    method, including non-POST methods on the generation path.

    Returns:
        The HTML content of the application page.
    """
    return HTMLResponse(content=_load_page(config.templates_dir))


# No method list: the route answers every method, custom verbs included.
app.add_route("/{full_path:path}", index, include_in_schema=False)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Configure logging and launch the uvicorn ASGI server.

    Host, port and log level come from :data:`~imagegen_edge.core.config.config`
    (``IMAGEGEN_SERVER_HOST``, ``IMAGEGEN_SERVER_PORT``, ``IMAGEGEN_LOG_LEVEL``).
    Defaults to ``0.0.0.0:8787``.

    This function is registered as the ``imagegen-edge`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    uvicorn.run(
        "imagegen_edge.api.main:app",
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    main()
