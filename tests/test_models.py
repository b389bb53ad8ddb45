import pytest
from pydantic import ValidationError

from backends.models import (
    ChunkForm,
    FileMatch,
    LineForm,
    ListResponse,
    SearchResponse,
)
from servers.codesearch.handlers import build_search_request
from tests.helpers import b64, chunk, search_payload


def test_search_response_with_null_files():
    parsed = SearchResponse.model_validate(search_payload(None))
    assert parsed.result.files is None
    assert parsed.result.match_count == 0
    assert parsed.result.duration == 1200


def test_missing_files_is_valid():
    parsed = SearchResponse.model_validate({"Result": {"MatchCount": 0, "FileCount": 0}})
    assert parsed.result.files is None


def test_null_optional_fields_take_defaults():
    file = FileMatch.model_validate(
        {
            "FileName": "a.go",
            "Language": None,
            "Repository": None,
            "Branches": None,
            "ChunkMatches": None,
            "LineMatches": None,
        }
    )
    assert file.language == ""
    assert file.repository == ""
    assert file.branches == ()
    assert file.matches is None


def test_missing_required_field_fails():
    with pytest.raises(ValidationError):
        SearchResponse.model_validate({"Result": {"FileCount": 1}})


def test_chunk_form_takes_precedence():
    file = FileMatch.model_validate(
        {
            "FileName": "a.go",
            "ChunkMatches": [chunk("x\n", 1, [(1, 1)])],
            "LineMatches": [{"Line": b64("x"), "LineNumber": 1}],
        }
    )
    assert isinstance(file.matches, ChunkForm)
    assert len(file.matches.chunks) == 1


def test_empty_chunk_list_is_still_chunk_form():
    file = FileMatch.model_validate(
        {
            "FileName": "a.go",
            "ChunkMatches": [],
            "LineMatches": [{"Line": b64("x"), "LineNumber": 1}],
        }
    )
    assert file.matches == ChunkForm(())


def test_line_form_when_only_lines_present():
    file = FileMatch.model_validate(
        {
            "FileName": "a.go",
            "LineMatches": [{"Line": b64("x"), "LineNumber": 3, "Before": None, "FileName": False}],
        }
    )
    assert isinstance(file.matches, LineForm)
    assert file.matches.lines[0].before is None
    assert file.matches.lines[0].line_number == 3


def test_symbol_info_keeps_absent_slots():
    payload = chunk("x\n", 1, [(1, 1), (1, 1)], symbol_info=[None, {"Sym": "foo"}])
    file = FileMatch.model_validate({"FileName": "a.go", "ChunkMatches": [payload]})
    symbols = file.chunk_matches[0].symbol_info
    assert symbols[0] is None
    assert symbols[1].sym == "foo"
    assert symbols[1].kind == ""


def test_models_are_immutable():
    file = FileMatch.model_validate({"FileName": "a.go"})
    with pytest.raises(ValidationError):
        file.file_name = "b.go"


def test_list_response():
    parsed = ListResponse.model_validate(
        {
            "List": {
                "Repos": [
                    {
                        "Repository": {
                            "Name": "nexus",
                            "URL": "https://example.com/nexus",
                            "Branches": [{"Name": "main", "Version": "0123456789abcdef"}],
                            "HasSymbols": True,
                        },
                        "Stats": {"Documents": 3, "ContentBytes": 100},
                    }
                ]
            }
        }
    )
    repo = parsed.repo_list.repos[0]
    assert repo.repository.branches[0].version == "0123456789abcdef"
    assert repo.stats.index_bytes == 0


def test_search_request_serialization():
    request = build_search_request("fn main", output_mode="content")
    assert request.model_dump(by_alias=True, exclude_none=True) == {
        "Q": "fn main",
        "Opts": {
            "MaxDocDisplayCount": 25,
            "NumContextLines": 2,
            "ChunkMatches": True,
            "Whole": False,
        },
    }


def test_search_request_defaults_outside_content_mode():
    request = build_search_request("fn main", limit=5)
    assert request.opts.max_doc_display_count == 5
    assert request.opts.num_context_lines == 0
    assert request.opts.chunk_matches is False


def test_explicit_context_lines_win():
    request = build_search_request("x", context_lines=7, output_mode="count")
    assert request.opts.num_context_lines == 7


@pytest.mark.parametrize(
    "result",
    [
        {"MatchCount": True, "FileCount": 1},
        {"MatchCount": 1, "FileCount": 1.5},
        {"MatchCount": "1", "FileCount": 1},
    ],
)
def test_counts_must_be_integers(result):
    with pytest.raises(ValidationError):
        SearchResponse.model_validate({"Result": result})


def test_line_numbers_must_be_integers():
    with pytest.raises(ValidationError):
        FileMatch.model_validate(
            {"FileName": "a.go", "LineMatches": [{"Line": b64("x"), "LineNumber": False}]}
        )
