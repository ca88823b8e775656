"""
xpay_client.errors
------------------
Every failure the SDK surfaces derives from XPayError so callers can catch
the whole family, or branch on the concrete class:

- EncodingError       payload could not be serialized or deserialized
  - EnvelopeError     received bytes are not a valid response envelope
  - PayloadDecodeError  verified content does not fit the target shape
- TransportError      I/O failure or non-2xx HTTP status
- SignatureError      envelope signature did not verify
- RemoteError         gateway answered with a non-success code
- ConfigError         keys or settings unusable; raised at construction
"""

from __future__ import annotations
from typing import Optional


class XPayError(Exception):
    pass


class EncodingError(XPayError):
    pass


class EnvelopeError(EncodingError):
    pass


class PayloadDecodeError(EncodingError):
    def __init__(self, message: str, content: str = ""):
        super().__init__(f"{message} (data:{content})")
        self.content = content


class TransportError(XPayError):
    def __init__(self, message: str, status_code: Optional[int] = None, body: bytes = b""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SignatureError(XPayError):
    pass


class RemoteError(XPayError):
    def __init__(self, code: str, message: str):
        super().__init__(f"ERROR:{code} , {message}")
        self.code = code
        self.message = message


class ConfigError(XPayError):
    pass
