"""Zoekt JSON API models.

Field aliases follow the Go struct names Zoekt marshals (``FileName``,
``ChunkMatches``, ...). Go encodes nil slices as ``null``, so every optional
field accepts ``null`` and treats it as absent. Integer fields are strict:
JSON booleans and floats are rejected rather than coerced.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationInfo, field_validator


class ZoektModel(BaseModel):
    """Base for immutable Zoekt payloads."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name is not None:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


# ── Search API ─────────────────────────────────────────────────────────────


class Location(ZoektModel):
    """A position inside a file. ``line_number`` is 1-based."""

    byte_offset: StrictInt = Field(0, alias="ByteOffset")
    line_number: StrictInt = Field(..., alias="LineNumber")
    column: StrictInt = Field(0, alias="Column")


class Range(ZoektModel):
    start: Location = Field(..., alias="Start")
    end: Location = Field(..., alias="End")


class SymbolInfo(ZoektModel):
    sym: str = Field(..., alias="Sym")
    kind: str = Field("", alias="Kind")
    parent: str = Field("", alias="Parent")
    parent_kind: str = Field("", alias="ParentKind")


class ChunkMatch(ZoektModel):
    """A contiguous region of a file holding one or more matches."""

    content: str = Field(..., alias="Content")
    content_start: Location = Field(..., alias="ContentStart")
    ranges: Tuple[Range, ...] = Field((), alias="Ranges")
    # Aligned with ``ranges``; a slot is None when the range has no symbol.
    symbol_info: Optional[Tuple[Optional[SymbolInfo], ...]] = Field(None, alias="SymbolInfo")
    score: float = Field(0.0, alias="Score")

    def is_match_line(self, line_number: int) -> bool:
        """Return True if any range covers ``line_number``."""
        return any(
            r.start.line_number <= line_number <= r.end.line_number for r in self.ranges
        )


class LineMatch(ZoektModel):
    """Legacy per-line match with separately captured context."""

    line: str = Field(..., alias="Line")
    line_number: StrictInt = Field(..., alias="LineNumber")
    before: Optional[str] = Field(None, alias="Before")
    after: Optional[str] = Field(None, alias="After")
    file_name_match: bool = Field(False, alias="FileName")


@dataclass(frozen=True)
class ChunkForm:
    """Matches of a file grouped into chunks."""

    chunks: Tuple[ChunkMatch, ...]


@dataclass(frozen=True)
class LineForm:
    """Matches of a file as one entry per matching line."""

    lines: Tuple[LineMatch, ...]


MatchForm = Union[ChunkForm, LineForm, None]


class FileMatch(ZoektModel):
    file_name: str = Field(..., alias="FileName")
    repository: str = Field("", alias="Repository")
    language: str = Field("", alias="Language")
    branches: Tuple[str, ...] = Field((), alias="Branches")
    version: str = Field("", alias="Version")
    chunk_matches: Optional[Tuple[ChunkMatch, ...]] = Field(None, alias="ChunkMatches")
    line_matches: Optional[Tuple[LineMatch, ...]] = Field(None, alias="LineMatches")
    content: str = Field("", alias="Content")
    score: float = Field(0.0, alias="Score")

    @property
    def matches(self) -> MatchForm:
        """Return the populated match form, preferring chunks over lines."""
        if self.chunk_matches is not None:
            return ChunkForm(self.chunk_matches)
        if self.line_matches is not None:
            return LineForm(self.line_matches)
        return None


class SearchResult(ZoektModel):
    match_count: StrictInt = Field(..., alias="MatchCount")
    file_count: StrictInt = Field(..., alias="FileCount")
    duration: StrictInt = Field(0, alias="Duration")
    files: Optional[Tuple[FileMatch, ...]] = Field(None, alias="Files")


class SearchResponse(ZoektModel):
    result: SearchResult = Field(..., alias="Result")


class SearchOptions(ZoektModel):
    max_doc_display_count: StrictInt = Field(..., alias="MaxDocDisplayCount")
    num_context_lines: StrictInt = Field(..., alias="NumContextLines")
    chunk_matches: bool = Field(False, alias="ChunkMatches")
    whole: bool = Field(False, alias="Whole")


class SearchRequest(ZoektModel):
    q: str = Field(..., alias="Q")
    opts: Optional[SearchOptions] = Field(None, alias="Opts")


# ── List API ───────────────────────────────────────────────────────────────


class BranchInfo(ZoektModel):
    name: str = Field(..., alias="Name")
    version: str = Field("", alias="Version")


class RepoInfo(ZoektModel):
    name: str = Field(..., alias="Name")
    url: str = Field("", alias="URL")
    branches: Tuple[BranchInfo, ...] = Field((), alias="Branches")
    has_symbols: bool = Field(False, alias="HasSymbols")


class RepoStats(ZoektModel):
    documents: StrictInt = Field(..., alias="Documents")
    content_bytes: StrictInt = Field(..., alias="ContentBytes")
    index_bytes: StrictInt = Field(0, alias="IndexBytes")


class RepoEntry(ZoektModel):
    repository: RepoInfo = Field(..., alias="Repository")
    stats: RepoStats = Field(..., alias="Stats")


class RepoList(ZoektModel):
    repos: Optional[Tuple[RepoEntry, ...]] = Field(None, alias="Repos")


class ListResponse(ZoektModel):
    repo_list: RepoList = Field(..., alias="List")


class ListRequest(ZoektModel):
    q: str = Field("", alias="Q")
