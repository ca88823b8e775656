# xpay_client/transport/transport_http.py
from typing import Optional
import time
import requests
from xpay_client.constants import DEFAULT_TIMEOUT
from xpay_client.errors import TransportError
from xpay_client.logger import get_logger
from xpay_client.transport.transport_base import BaseTransport, Headers, TransportResponse

log = get_logger("XPay.Transport.HTTP")

# Small reads so a body trickled in byte by byte still hits the deadline check.
_READ_CHUNK = 1


class HTTPTransport(BaseTransport):
    """
    HTTPS transport for posting signed envelopes to the XPay gateway.

    A single requests.Session is kept so connections are pooled across
    calls; the session is the only shared state and requests documents it
    as safe for this use.

    `timeout` is a deadline for the whole round trip. requests only bounds
    the connect and each individual read, so the body is streamed and the
    elapsed time checked as it arrives. A call can overrun the deadline by
    at most one stalled read.
    """
    name = "http"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def post(self, url: str, body: bytes, headers: Optional[Headers] = None,
             timeout: Optional[float] = None) -> TransportResponse:
        h = {"Content-Type": "application/json"}
        if headers:
            h.update(headers)

        limit = timeout or self.timeout
        deadline = time.monotonic() + limit

        log.debug(f"[HTTP POST] → {url} | bytes={len(body)}")
        try:
            res = self.session.post(url, data=body, headers=h, timeout=limit, stream=True)
            try:
                chunks = []
                self._check_deadline(url, deadline, limit)
                for chunk in res.iter_content(chunk_size=_READ_CHUNK):
                    chunks.append(chunk)
                    self._check_deadline(url, deadline, limit)
                content = b"".join(chunks)
            finally:
                res.close()
        except requests.RequestException as e:
            log.error(f"[HTTP POST] {url} failed: {e}")
            raise TransportError(f"request to {url} failed: {e}") from e

        log.info(f"[HTTP POST] {url} → {res.status_code} {res.reason}")
        return TransportResponse(status_code=res.status_code, body=content, reason=res.reason or "")

    @staticmethod
    def _check_deadline(url: str, deadline: float, limit: float) -> None:
        if time.monotonic() > deadline:
            log.error(f"[HTTP POST] {url} exceeded {limit}s deadline")
            raise TransportError(f"request to {url} exceeded {limit}s deadline")

    def close(self) -> None:
        self.session.close()
