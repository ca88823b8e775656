"""
xpay_client.envelope
--------------------
Wire envelopes exchanged with the XPay gateway and the canonical string
they are signed over.

- RequestEnvelope: outbound {request_no, platform_code, timestamp, sign, content}
- ResponseEnvelope: inbound response or pushed notification
  {timestamp, sign, code, msg, content?}

Both expose the same flat name -> text projection (to_string_map), so the
signing code never needs to know which of the two it is handling.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Protocol, Union
import json

from .constants import SIGN_FIELD, SUCCESS_CODE
from .errors import EnvelopeError
from .utils import new_request_no, now_unix


class SignableRecord(Protocol):
    def to_string_map(self) -> Dict[str, str]: ...


def to_canonical_string(record: Mapping[str, str]) -> str:
    """Build the `k=v&k=v` string that gets hashed and signed.

    The `sign` key is dropped, keys are ordered by UTF-8 byte value and
    fields whose value is blank after stripping are left out entirely.
    """
    keys = sorted((k for k in record if k != SIGN_FIELD), key=lambda k: k.encode("utf-8"))
    pairs = []
    for k in keys:
        v = (record[k] or "").strip()
        if v:
            pairs.append(f"{k}={v}")
    return "&".join(pairs)


@dataclass
class RequestEnvelope:
    request_no: str = ""
    platform_code: str = ""
    timestamp: int = 0
    sign: str = ""
    content: str = ""           # JSON-encoded business payload

    def to_string_map(self) -> Dict[str, str]:
        return {
            "request_no": self.request_no,
            "platform_code": self.platform_code,
            "timestamp": str(self.timestamp),
            "sign": self.sign,
            "content": self.content,
        }

    def canonical_string(self) -> str:
        return to_canonical_string(self.to_string_map())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request_no": self.request_no,
            "platform_code": self.platform_code,
            "timestamp": self.timestamp,
            "sign": self.sign,
            "content": self.content,
        }

    def to_json_bytes(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    @staticmethod
    def make(platform_code: str, content: str) -> "RequestEnvelope":
        """Unsigned envelope with a fresh request number and the current time."""
        return RequestEnvelope(
            request_no=new_request_no(),
            platform_code=platform_code,
            timestamp=now_unix(),
            sign="",
            content=content,
        )


@dataclass
class ResponseEnvelope:
    timestamp: int = 0
    sign: str = ""
    code: str = ""
    msg: str = ""
    content: str = ""           # empty on error

    def to_string_map(self) -> Dict[str, str]:
        return {
            "timestamp": str(self.timestamp),
            "code": self.code,
            "msg": self.msg,
            "sign": self.sign,
            "content": self.content,
        }

    def canonical_string(self) -> str:
        return to_canonical_string(self.to_string_map())

    def is_success(self) -> bool:
        return self.code == SUCCESS_CODE

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "timestamp": self.timestamp,
            "sign": self.sign,
            "code": self.code,
            "msg": self.msg,
        }
        if self.content:
            d["content"] = self.content
        return d

    def to_json_bytes(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResponseEnvelope":
        """Rebuild from a decoded JSON object. Missing fields take zero values,
        fields of the wrong JSON type raise EnvelopeError."""
        ts = data.get("timestamp", 0)
        if ts is None:
            ts = 0
        if isinstance(ts, bool) or not isinstance(ts, int):
            raise EnvelopeError(f"timestamp must be an integer, got {type(ts).__name__}")

        fields = {}
        for name in ("sign", "code", "msg", "content"):
            value = data.get(name, "")
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise EnvelopeError(f"{name} must be a string, got {type(value).__name__}")
            fields[name] = value

        return cls(timestamp=ts, **fields)

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> "ResponseEnvelope":
        try:
            data = json.loads(raw)
        except (ValueError, TypeError) as e:
            raise EnvelopeError(f"malformed envelope: {e}") from e
        if not isinstance(data, dict):
            raise EnvelopeError("malformed envelope: expected a JSON object")
        return cls.from_dict(data)
