"""Text renderers for Zoekt search and list results."""

from typing import Callable, Dict, List

from backends.encoding import decode_payload
from backends.models import (
    ChunkForm,
    ChunkMatch,
    FileMatch,
    LineForm,
    LineMatch,
    RepoList,
    SearchResult,
    SymbolInfo,
)

BYTES_PER_MB = 1_048_576
SHORT_VERSION_LENGTH = 10


def split_lines(text: str) -> List[str]:
    """Split text into lines.

    A trailing newline does not start a new line. A carriage return is
    stripped only when it is part of a ``\\r\\n`` line ending.
    """
    if not text:
        return []
    *terminated, last = text.split("\n")
    lines = [line[:-1] if line.endswith("\r") else line for line in terminated]
    if last:
        lines.append(last)
    return lines


def _summary(result: SearchResult) -> str:
    return f"{result.match_count} matches in {result.file_count} files"


def _file_header(file: FileMatch) -> str:
    lang = f" ({file.language})" if file.language else ""
    return f"--- {file.file_name}{lang} ---"


def _symbol_line(sym: SymbolInfo) -> str:
    kind = f" [{sym.kind}]" if sym.kind else ""
    parent = f" in {sym.parent}" if sym.parent else ""
    return f"  symbol: {sym.sym}{kind}{parent}"


def _chunk_lines(chunk: ChunkMatch) -> List[str]:
    out = [_symbol_line(sym) for sym in chunk.symbol_info or () if sym is not None]
    start = chunk.content_start.line_number
    for offset, line in enumerate(split_lines(decode_payload(chunk.content))):
        line_num = start + offset
        marker = ">" if chunk.is_match_line(line_num) else " "
        out.append(f"{marker}{line_num}:{line}")
    return out


def _line_match_lines(match: LineMatch) -> List[str]:
    out = []
    if match.before is not None:
        before = split_lines(decode_payload(match.before))
        # Numbered backward from the match using the decoded line count.
        for i, ctx_line in enumerate(before):
            num = max(match.line_number - (len(before) - i), 0)
            out.append(f" {num}:{ctx_line}")

    out.append(f">{match.line_number}: {decode_payload(match.line).rstrip()}")

    if match.after is not None:
        for i, ctx_line in enumerate(split_lines(decode_payload(match.after))):
            out.append(f" {match.line_number + 1 + i}:{ctx_line}")
    return out


def _render(lines: List[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def format_content(result: SearchResult) -> str:
    """Render matching lines with context, line numbers and match markers.

    Lines inside a match range are prefixed with ``>``, context lines with a
    space. Chunk matches are preferred over legacy line matches.
    """
    out = [_summary(result)]
    for file in result.files or ():
        out.append("")
        out.append(_file_header(file))

        matches = file.matches
        if isinstance(matches, ChunkForm):
            for chunk in matches.chunks:
                out.extend(_chunk_lines(chunk))
        elif isinstance(matches, LineForm):
            for line_match in matches.lines:
                out.extend(_line_match_lines(line_match))
    return _render(out)


def format_files(result: SearchResult) -> str:
    """Render only the paths of matching files."""
    out = [f"Found {result.file_count} files"]
    out.extend(file.file_name for file in result.files or ())
    return _render(out)


def match_count(file: FileMatch) -> int:
    """Count the matches Zoekt returned for a single file."""
    matches = file.matches
    if isinstance(matches, ChunkForm):
        return sum(len(chunk.ranges) for chunk in matches.chunks)
    if isinstance(matches, LineForm):
        return len(matches.lines)
    return 0


def format_count(result: SearchResult) -> str:
    """Render per-file match counts."""
    out = [_summary(result)]
    out.extend(f"{file.file_name}:{match_count(file)}" for file in result.files or ())
    return _render(out)


def short_version(version: str) -> str:
    return version[:SHORT_VERSION_LENGTH]


def format_repos(repo_list: RepoList) -> str:
    """Render indexed repositories with document counts, sizes and branches."""
    repos = repo_list.repos or ()
    out = [f"{len(repos)} repositories indexed"]
    for entry in repos:
        repo, stats = entry.repository, entry.stats
        content_mb = stats.content_bytes / BYTES_PER_MB
        index_mb = stats.index_bytes / BYTES_PER_MB
        symbols = " [symbols]" if repo.has_symbols else ""
        out.append(
            f"  {repo.name} — {stats.documents} files, {content_mb:.1f} MB content, "
            f"{index_mb:.1f} MB index{symbols}"
        )
        for branch in repo.branches:
            out.append(f"    branch: {branch.name} ({short_version(branch.version)})")
    return _render(out)


SEARCH_FORMATTERS: Dict[str, Callable[[SearchResult], str]] = {
    "content": format_content,
    "files_with_matches": format_files,
    "count": format_count,
}

DEFAULT_OUTPUT_MODE = "files_with_matches"


def get_formatter(output_mode: str) -> Callable[[SearchResult], str]:
    """Return the renderer for ``output_mode``; unknown modes list files."""
    return SEARCH_FORMATTERS.get(output_mode, format_files)
