"""
xpay_client.utils
-----------------
Small helpers for request identifiers, unix timestamps, base64 and the
compact JSON used for envelope content.
"""

from __future__ import annotations
import base64, binascii, json, time, uuid
from typing import Any

def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    # strict apart from line breaks, which wrapped base64 may carry
    s = s.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(s.encode("ascii"), validate=True)
    except (UnicodeEncodeError, binascii.Error) as e:
        raise ValueError(f"invalid base64: {e}") from e

def now_unix() -> int:
    return int(time.time())

def new_request_no() -> str:
    # 128-bit random identifier, canonical hyphenated text form
    return str(uuid.uuid4())

def payload_json(obj: Any) -> str:
    # Compact form, matching what the gateway produces for content
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
