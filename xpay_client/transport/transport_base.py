from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

Headers = Dict[str, str]


@dataclass
class TransportResponse:
    status_code: int
    body: bytes = b""
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class BaseTransport:
    """
    Transport contract used by XPayClient.

    Takes an already serialized envelope and hands back the raw response.
    I/O failures raise TransportError; HTTP status is reported, not judged,
    so the client decides what a non-2xx answer means.
    """
    name: str = "base"

    def post(
        self,
        url: str,
        body: bytes,
        headers: Optional[Headers] = None,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        raise NotImplementedError

    def close(self) -> None:
        return

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()
