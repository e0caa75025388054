"""OpenAPI configuration for mongoscope."""

from __future__ import annotations

from litestar.openapi import OpenAPIConfig
from litestar.openapi.plugins import ScalarRenderPlugin, SwaggerRenderPlugin


def get_openapi_config(version: str) -> OpenAPIConfig:
    """Build the OpenAPI config.

    Endpoints (relative to /schema):
        - /schema/ - Scalar UI (default)
        - /schema/swagger - Swagger UI
        - /schema/openapi.json - OpenAPI schema
    """
    return OpenAPIConfig(
        title="mongoscope API",
        version=version,
        description="Read-only MongoDB server, database and collection statistics",
        path="/schema",
        render_plugins=[ScalarRenderPlugin(path="/"), SwaggerRenderPlugin(path="/swagger")],
        use_handler_docstrings=True,
    )
