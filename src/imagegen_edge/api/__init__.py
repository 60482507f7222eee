"""imagegen-edge - FastAPI HTTP layer.

This package contains the FastAPI application and the Pydantic request model
for the generation endpoint.

Modules
-------
main
    FastAPI application with the generation route, the static page
    catch-all, and the ``main()`` CLI entry point.
models
    Pydantic model for the ``POST /generate-image`` body and the
    parameter-bag builder.
"""
