"""Decoding of Zoekt text payloads."""

import base64


def decode_payload(value: str) -> str:
    """Decode a base64-encoded field, falling back to the raw string if it's plain text.

    Zoekt marshals ``[]byte`` fields (chunk content, lines, context) as
    standard base64. Some deployments hand back plain text instead, so a
    value that is not valid base64 of UTF-8 text is returned unchanged.
    """
    if not value:
        return ""
    try:
        raw = base64.b64decode(value, validate=True)
        # Non-canonical encodings (non-zero trailing bits) are not base64 here.
        if base64.b64encode(raw) != value.encode("ascii"):
            return value
        return raw.decode("utf-8")
    except ValueError:
        # binascii.Error and UnicodeDecodeError are both ValueErrors
        return value
