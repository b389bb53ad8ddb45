"""Zoekt code search MCP server."""

import asyncio
import base64
import json
import logging
import os
import pathlib
import sys
import uuid
from typing import Annotated, Any, Dict, Optional

from fastmcp import FastMCP
from fastmcp.server.dependencies import get_http_request
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from pydantic import Field

from backends import ZoektSearchClient
from core import PromptManager
from servers.codesearch import handlers
from servers.codesearch.config import ServerConfig

logger = logging.getLogger(__name__)

SERVER_NAME = "zoekt-mcp"
PROMPTS_FILE = pathlib.Path(__file__).parent / "prompts.yaml"


class TelemetryManager:
    """Telemetry manager for Langfuse integration."""

    def __init__(self, config: ServerConfig) -> None:
        """Initialize telemetry manager."""
        self.config = config
        self.enabled = config.langfuse_enabled
        if self.enabled:
            self._setup()

    def _setup(self) -> None:
        """Export spans to Langfuse over OTLP/HTTP."""
        langfuse_auth = base64.b64encode(
            f"{self.config.langfuse_public_key}:{self.config.langfuse_secret_key}".encode()
        ).decode()

        os.environ["OTEL_EXPORTER_OTLP_HEADERS"] = f"Authorization=Basic {langfuse_auth}"
        os.environ["OTEL_EXPORTER_OTLP_ENDPOINT"] = (
            f"{self.config.langfuse_host}/api/public/otel"
        )

        provider = TracerProvider()
        provider.add_span_processor(SimpleSpanProcessor(OTLPSpanExporter()))
        trace.set_tracer_provider(provider)

    def get_tracer(self, name: str) -> trace.Tracer:
        """Get tracer instance; spans are not exported when disabled."""
        if self.enabled:
            return trace.get_tracer(name)
        return trace.get_tracer(name, tracer_provider=TracerProvider())

    def set_span_attributes(
        self,
        span: trace.Span,
        input_data: Dict[str, Any],
        output_data: Dict[str, Any],
        session_id: str,
    ) -> None:
        """Attach common Langfuse attributes to the span."""
        if not self.enabled:
            return
        try:
            span.set_attribute("langfuse.session.id", session_id)
            span.set_attribute("langfuse.tags", [SERVER_NAME])
            span.set_attribute("input", json.dumps(input_data))
            span.set_attribute("output", json.dumps(output_data))
        except Exception as exc:
            logger.error(f"Error setting span attributes: {exc}")


def _session_id() -> str:
    """Return the caller's X-TRACE-ID header, or a fresh id outside HTTP transports."""
    try:
        request = get_http_request()
    except RuntimeError:
        return str(uuid.uuid4())
    return str(request.headers.get("X-TRACE-ID", uuid.uuid4()))


def create_server(
    config: ServerConfig, client: Optional[ZoektSearchClient] = None
) -> FastMCP:
    """Build the MCP server exposing ``search`` and ``list_repos``.

    Args:
        config: Server configuration
        client: Zoekt client to use; built from ``config`` when omitted
    """
    prompts = PromptManager(PROMPTS_FILE)
    telemetry = TelemetryManager(config)
    tracer = telemetry.get_tracer(SERVER_NAME)

    if client is None:
        client = ZoektSearchClient(config.zoekt_url, timeout=config.zoekt_timeout)

    server = FastMCP(
        name=SERVER_NAME,
        instructions=prompts.render_prompt("server.instructions", zoekt_url=client.base_url),
    )

    @server.tool(description=prompts.get_text("tools.search.description"))
    async def search(
        query: Annotated[str, Field(description=prompts.get_text("tools.search.params.query"))],
        limit: Annotated[
            Optional[int],
            Field(ge=0, description=prompts.get_text("tools.search.params.limit")),
        ] = None,
        context_lines: Annotated[
            Optional[int],
            Field(ge=0, description=prompts.get_text("tools.search.params.context_lines")),
        ] = None,
        output_mode: Annotated[
            Optional[str],
            Field(description=prompts.get_text("tools.search.params.output_mode")),
        ] = None,
    ) -> str:
        with tracer.start_as_current_span("ZoektMcp:search") as span:
            result = await asyncio.to_thread(
                handlers.search, client, query, limit, context_lines, output_mode
            )
            telemetry.set_span_attributes(
                span,
                {
                    "query": query,
                    "limit": limit,
                    "context_lines": context_lines,
                    "output_mode": output_mode,
                },
                {"output": result},
                _session_id(),
            )
            return result

    @server.tool(description=prompts.get_text("tools.list_repos.description"))
    async def list_repos(
        query: Annotated[
            Optional[str],
            Field(description=prompts.get_text("tools.list_repos.params.query")),
        ] = None,
    ) -> str:
        with tracer.start_as_current_span("ZoektMcp:list_repos") as span:
            result = await asyncio.to_thread(handlers.list_repos, client, query)
            telemetry.set_span_attributes(
                span, {"query": query}, {"output": result}, _session_id()
            )
            return result

    return server


def _run(server: FastMCP, config: ServerConfig) -> None:
    if config.transport == "stdio":
        server.run(transport="stdio")
    elif config.transport == "streamable-http":
        server.run(
            transport="streamable-http", host=config.host, port=config.streamable_http_port
        )
    else:
        server.run(transport="sse", host=config.host, port=config.sse_port)


def main() -> None:
    """Main entry point."""
    config = ServerConfig()
    # stdout carries the stdio transport
    logging.basicConfig(level=config.log_level, stream=sys.stderr)

    logger.info(f"{SERVER_NAME} starting")
    logger.info(f"Using Zoekt at {config.zoekt_url} over {config.transport}")

    client = ZoektSearchClient(config.zoekt_url, timeout=config.zoekt_timeout)
    server = create_server(config, client)
    try:
        _run(server, config)
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt (CTRL+C)")
    except Exception as exc:
        logger.error(f"Server error: {exc}")
        raise
    finally:
        client.close()
        logger.info("Server has shut down.")


if __name__ == "__main__":
    main()
