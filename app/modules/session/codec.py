"""
URL-fragment codec for form snapshots: compact JSON, UTF-8, base64url
with the '=' padding stripped, so any Unicode survives a shared link.
"""

import base64
import binascii
import json
from typing import Any


class StateDecodeError(ValueError):
    """The fragment is not a snapshot this codec produced."""


def encode_state(data: Any) -> str:
    raw = json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_state(fragment: str) -> Any:
    text = fragment.strip().lstrip("#")
    if not text:
        raise StateDecodeError("empty fragment")

    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        return json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise StateDecodeError(str(e)) from e
