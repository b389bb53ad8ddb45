"""Configuration for the Zoekt MCP server."""

import os

from dotenv import load_dotenv

from backends.search import DEFAULT_TIMEOUT

load_dotenv()

TRANSPORTS = ("stdio", "streamable-http", "sse")


class ServerConfig:
    """Server configuration."""

    def __init__(self) -> None:
        """Initialize server configuration from environment variables."""
        self.zoekt_url = os.getenv("ZOEKT_URL", "http://localhost:6070")
        self.zoekt_timeout = self._get_float_env("ZOEKT_TIMEOUT", DEFAULT_TIMEOUT)

        self.transport = os.getenv("MCP_TRANSPORT", "stdio").lower()
        if self.transport not in TRANSPORTS:
            raise ValueError(
                f"Invalid option for MCP_TRANSPORT. Valid options are [{'|'.join(TRANSPORTS)}]"
            )
        self.host = os.getenv("MCP_HOST", "127.0.0.1")
        self.sse_port = self._get_int_env("MCP_SSE_PORT", 8000)
        self.streamable_http_port = self._get_int_env("MCP_STREAMABLE_HTTP_PORT", 8080)

        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        # Langfuse configuration (optional)
        self.langfuse_enabled = os.getenv("LANGFUSE_ENABLED", "false").lower() == "true"
        if self.langfuse_enabled:
            self.langfuse_public_key = self._get_required_env("LANGFUSE_PUBLIC_KEY")
            self.langfuse_secret_key = self._get_required_env("LANGFUSE_SECRET_KEY")
            self.langfuse_host = self._get_required_env("LANGFUSE_HOST")
        else:
            self.langfuse_public_key = ""
            self.langfuse_secret_key = ""
            self.langfuse_host = ""

    @staticmethod
    def _get_required_env(key: str) -> str:
        """Get required environment variable or raise descriptive error."""
        value = os.getenv(key)
        if not value:
            raise ValueError(f"Required environment variable {key} is not set")
        return value

    @staticmethod
    def _get_int_env(key: str, default: int) -> int:
        value = os.getenv(key, str(default))
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Environment variable {key} must be an integer, got {value!r}")

    @staticmethod
    def _get_float_env(key: str, default: float) -> float:
        value = os.getenv(key, str(default))
        try:
            result = float(value)
        except ValueError:
            raise ValueError(f"Environment variable {key} must be a number, got {value!r}")
        if result <= 0:
            raise ValueError(f"Environment variable {key} must be positive, got {value!r}")
        return result
