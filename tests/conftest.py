import pytest

ENV_VARS = [
    "ZOEKT_URL",
    "ZOEKT_TIMEOUT",
    "MCP_TRANSPORT",
    "MCP_HOST",
    "MCP_SSE_PORT",
    "MCP_STREAMABLE_HTTP_PORT",
    "LOG_LEVEL",
    "LANGFUSE_ENABLED",
    "LANGFUSE_PUBLIC_KEY",
    "LANGFUSE_SECRET_KEY",
    "LANGFUSE_HOST",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's environment out of configuration under test."""
    for key in ENV_VARS:
        monkeypatch.delenv(key, raising=False)
