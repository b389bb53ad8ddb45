import base64
import json
import threading
from typing import Any, List, Optional, Union

__all__ = ["b64", "BarrierSession", "FakeResponse", "FakeSession", "search_payload", "chunk", "location"]


def b64(text: str) -> str:
    """Encode text the way Zoekt marshals ``[]byte`` fields."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def location(line_number: int, column: int = 1) -> dict:
    return {"ByteOffset": 0, "LineNumber": line_number, "Column": column}


def chunk(
    content: str,
    start_line: int,
    ranges: List[tuple],
    symbol_info: Optional[list] = None,
) -> dict:
    """Build a ChunkMatch payload; ``ranges`` holds (start_line, end_line) pairs."""
    return {
        "Content": b64(content),
        "ContentStart": location(start_line),
        "Ranges": [{"Start": location(s), "End": location(e, 10)} for s, e in ranges],
        "SymbolInfo": symbol_info,
        "Score": 1.0,
    }


def search_payload(files: Optional[list], match_count: int = 0, file_count: int = 0) -> dict:
    return {
        "Result": {
            "MatchCount": match_count,
            "FileCount": file_count,
            "Duration": 1200,
            "Files": files,
        }
    }


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code: int = 200, body: Union[str, dict, None] = None, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.text = body if isinstance(body, str) else json.dumps(body)

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Records POSTs and answers with a canned response or raises an error."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[dict] = []
        self.closed = False

    def post(self, url: str, json: Any = None, timeout: Any = None) -> FakeResponse:
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True


class BarrierSession(FakeSession):
    """FakeSession whose POSTs block until ``parties`` of them are in flight."""

    def __init__(self, response: FakeResponse, parties: int, timeout: float = 5.0) -> None:
        super().__init__(response)
        self.barrier = threading.Barrier(parties, timeout=timeout)

    def post(self, url: str, json: Any = None, timeout: Any = None) -> FakeResponse:
        self.barrier.wait()
        return super().post(url, json=json, timeout=timeout)
