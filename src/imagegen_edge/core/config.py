"""Configuration management for imagegen-edge.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the IMAGEGEN_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (IMAGEGEN_* prefix)
2. .env file in the working directory
3. Default values defined in EdgeConfig

Example .env file:
    IMAGEGEN_ACCOUNT_ID=0123456789abcdef0123456789abcdef
    IMAGEGEN_API_TOKEN=...
    IMAGEGEN_SERVER_PORT=8787

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time and
is the single source of truth for the API layer and the CLI entry point.

Usage Example
-------------
    from imagegen_edge.core.config import config

    print(config.model_id)
    print(config.run_url(config.model_id))

Workers AI Credentials
----------------------
``account_id`` and ``api_token`` are optional at load time so that the page
can be served (and tests can run) without credentials.  The binding checks
them when a generation request actually reaches the provider.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Directory holding index.html, shipped inside the package.
PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

DEFAULT_MODEL_ID = "@cf/stabilityai/stable-diffusion-xl-base-1.0"


class EdgeConfig(BaseSettings):
    """Main configuration for imagegen-edge.

    Attributes
    ----------
    Inference Settings:
        model_id : str
            Workers AI model identifier every generation request is sent to
        account_id : str | None
            Cloudflare account that owns the Workers AI usage
        api_token : SecretStr | None
            API token with Workers AI permissions
        api_base_url : str
            Base URL of the Cloudflare v4 REST API
        request_timeout : float | None
            Seconds to wait for the provider; None waits indefinitely

    Server Settings:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Bind port for uvicorn (1024-65535)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logger level configured by the CLI entry point

    Paths:
        templates_dir : Path
            Directory containing ``index.html``

    Examples
    --------
        >>> custom_config = EdgeConfig(
        ...     account_id="abc123",
        ...     api_token="secret",
        ...     request_timeout=60,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IMAGEGEN_",
        case_sensitive=False,
    )

    # Inference settings
    model_id: str = Field(
        default=DEFAULT_MODEL_ID,
        description="Workers AI model identifier",
    )
    account_id: str | None = Field(
        default=None,
        description="Cloudflare account ID used in the Workers AI run URL",
    )
    api_token: SecretStr | None = Field(
        default=None,
        description="Cloudflare API token with Workers AI access",
    )
    api_base_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        description="Base URL of the Cloudflare REST API",
    )
    request_timeout: float | None = Field(
        default=None,
        description="Provider timeout in seconds (None = no timeout)",
        gt=0,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=8787,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )

    # Paths
    templates_dir: Path = Field(
        default=PACKAGE_TEMPLATES_DIR,
        description="Directory containing index.html",
    )

    def run_url(self, model: str) -> str:
        """Return the Workers AI run URL for *model*.

        Args:
            model: Model identifier, e.g. ``"@cf/stabilityai/stable-diffusion-xl-base-1.0"``.

        Returns:
            Absolute URL of the ``ai/run`` endpoint for the configured account.
        """
        base = self.api_base_url.rstrip("/")
        return f"{base}/accounts/{self.account_id}/ai/run/{model}"


# Global configuration instance
config = EdgeConfig()
