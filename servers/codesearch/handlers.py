"""Tool handlers: build Zoekt requests and render results as text.

Failures are returned as text rather than raised, so the MCP caller always
receives a readable tool result.
"""

import logging
from typing import Optional

from backends import (
    DEFAULT_OUTPUT_MODE,
    ListRequest,
    SearchOptions,
    SearchRequest,
    ZoektError,
    ZoektSearchClient,
    format_repos,
    get_formatter,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 25
CONTENT_CONTEXT_LINES = 2


def build_search_request(
    query: str,
    limit: Optional[int] = None,
    context_lines: Optional[int] = None,
    output_mode: str = DEFAULT_OUTPUT_MODE,
) -> SearchRequest:
    content_mode = output_mode == "content"
    if context_lines is None:
        context_lines = CONTENT_CONTEXT_LINES if content_mode else 0
    return SearchRequest(
        q=query,
        opts=SearchOptions(
            max_doc_display_count=DEFAULT_LIMIT if limit is None else limit,
            num_context_lines=context_lines,
            chunk_matches=content_mode,
            whole=False,
        ),
    )


def search(
    client: ZoektSearchClient,
    query: str,
    limit: Optional[int] = None,
    context_lines: Optional[int] = None,
    output_mode: Optional[str] = None,
) -> str:
    """Search Zoekt and render the result for ``output_mode``."""
    mode = output_mode or DEFAULT_OUTPUT_MODE
    logger.info(f"Search query: {query!r} (mode={mode})")

    request = build_search_request(query, limit, context_lines, mode)
    try:
        result = client.search(request)
    except ZoektError as exc:
        return str(exc)
    return get_formatter(mode)(result)


def list_repos(client: ZoektSearchClient, query: Optional[str] = None) -> str:
    """List indexed repositories, optionally filtered by a Zoekt query."""
    try:
        repo_list = client.list_repos(ListRequest(q=query or ""))
    except ZoektError as exc:
        return str(exc)
    return format_repos(repo_list)
