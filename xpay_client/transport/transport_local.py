# xpay_client/transport/transport_local.py
from collections import deque
from typing import Callable, Deque, Dict, Optional, Tuple
from xpay_client.errors import TransportError
from xpay_client.logger import get_logger
from xpay_client.transport.transport_base import BaseTransport, Headers, TransportResponse

log = get_logger("XPay.Transport.Local")

Handler = Callable[[bytes], Tuple[int, bytes]]


class LocalTransport(BaseTransport):
    """
    In-process loopback: requests are dispatched to registered handlers
    instead of the network. Used by tests and offline sandboxes to stand in
    for the gateway.

    `sent` keeps only the last `max_sent` (url, body) pairs.
    """
    name = "local"

    def __init__(self, routes: Optional[Dict[str, Handler]] = None, max_sent: int = 100):
        self.routes: Dict[str, Handler] = dict(routes or {})
        self.sent: Deque[Tuple[str, bytes]] = deque(maxlen=max_sent)

    def register(self, url: str, handler: Handler) -> None:
        self.routes[url] = handler

    def post(self, url: str, body: bytes, headers: Optional[Headers] = None,
             timeout: Optional[float] = None) -> TransportResponse:
        log.info(f"[LOCAL POST] {url} bytes={len(body)}")
        self.sent.append((url, body))
        handler = self.routes.get(url)
        if handler is None:
            return TransportResponse(status_code=404, body=b"not found", reason="Not Found")
        try:
            status, payload = handler(body)
        except Exception as e:
            raise TransportError(f"local handler for {url} failed: {e}") from e
        return TransportResponse(status_code=status, body=payload)
