# xpay_client/transport/__init__.py
import os
from typing import Optional
from xpay_client.constants import DEFAULT_TIMEOUT
from xpay_client.transport.transport_base import BaseTransport, TransportResponse
from xpay_client.transport.transport_http import HTTPTransport
from xpay_client.transport.transport_local import LocalTransport


def transport_factory(mode: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT) -> BaseTransport:
    """
    mode (or XPAY_TRANSPORT when not given):
      - "http"  → HTTPTransport (default)
      - "local" → LocalTransport, no network
    """
    mode = (mode or os.getenv("XPAY_TRANSPORT", "http")).lower()

    if mode == "local":
        return LocalTransport()

    return HTTPTransport(timeout=timeout)


__all__ = ["BaseTransport", "TransportResponse", "HTTPTransport", "LocalTransport", "transport_factory"]
