"""Zoekt API client, result models and text renderers."""

from .encoding import decode_payload
from .formatting import (
    DEFAULT_OUTPUT_MODE,
    format_content,
    format_count,
    format_files,
    format_repos,
    get_formatter,
)
from .models import (
    ChunkForm,
    FileMatch,
    LineForm,
    ListRequest,
    RepoList,
    SearchOptions,
    SearchRequest,
    SearchResult,
)
from .search import (
    ZoektError,
    ZoektResponseError,
    ZoektSearchClient,
    ZoektStatusError,
    ZoektUnavailableError,
)

__all__ = [
    "decode_payload",
    "DEFAULT_OUTPUT_MODE",
    "format_content",
    "format_count",
    "format_files",
    "format_repos",
    "get_formatter",
    "ChunkForm",
    "FileMatch",
    "LineForm",
    "ListRequest",
    "RepoList",
    "SearchOptions",
    "SearchRequest",
    "SearchResult",
    "ZoektError",
    "ZoektResponseError",
    "ZoektSearchClient",
    "ZoektStatusError",
    "ZoektUnavailableError",
]
