"""
xpay_client.client
------------------
XPayClient: the merchant-side entry point.

A client is an immutable value holding the platform code, the gateway URL,
the merchant private key (signing), the gateway public key (verification)
and a transport. It has no other state, so one instance can be shared by
any number of threads.
"""

from __future__ import annotations
from typing import Any, Optional, Union

from cryptography.hazmat.primitives.asymmetric import rsa

from .config import ClientConfig
from .constants import DEFAULT_TIMEOUT, PATH_QR_PAY, PATH_QUERY
from .crypto import load_private_key, load_public_key
from .entities import OrderItem, QrPayRequest, QrPayResponse, QueryRequest
from .errors import ConfigError, TransportError
from .logger import get_logger
from .protocol import build_request, unwrap
from .transport import BaseTransport, transport_factory

log = get_logger("XPay.Client")


class XPayClient:
    __slots__ = ("platform_code", "gateway", "private_key", "public_key", "transport", "timeout")

    def __init__(
        self,
        platform_code: str,
        gateway: str,
        private_key: rsa.RSAPrivateKey,
        public_key: rsa.RSAPublicKey,
        transport: Optional[BaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise ConfigError("private_key must be an RSA private key")
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise ConfigError("public_key must be an RSA public key")
        if not platform_code:
            raise ConfigError("platform_code is required")

        setattr_ = object.__setattr__
        setattr_(self, "platform_code", platform_code)
        setattr_(self, "gateway", gateway.rstrip("/"))
        setattr_(self, "private_key", private_key)
        setattr_(self, "public_key", public_key)
        setattr_(self, "transport", transport or transport_factory("http", timeout=timeout))
        setattr_(self, "timeout", timeout)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"XPayClient(platform_code={self.platform_code!r}, gateway={self.gateway!r})"

    @classmethod
    def from_key_files(
        cls,
        platform_code: str,
        gateway: str,
        private_key_path: str,
        public_key_path: str,
        transport: Optional[BaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "XPayClient":
        """Load PEM keys from disk; raises ConfigError if either is unusable."""
        return cls(
            platform_code,
            gateway,
            load_private_key(private_key_path),
            load_public_key(public_key_path),
            transport=transport,
            timeout=timeout,
        )

    @classmethod
    def from_config(cls, config: ClientConfig, transport: Optional[BaseTransport] = None) -> "XPayClient":
        # keys first, so a ConfigError never leaves an open session behind
        private_key = load_private_key(config.private_key_path)
        public_key = load_public_key(config.public_key_path)

        owned = transport is None
        if owned:
            transport = transport_factory(config.transport, timeout=config.timeout)
        try:
            return cls(config.platform_code, config.gateway, private_key, public_key,
                       transport=transport, timeout=config.timeout)
        except ConfigError:
            if owned:
                transport.close()
            raise

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "XPayClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Envelope operations
    # ------------------------------------------------------------------
    def build_request(self, payload: Any) -> bytes:
        return build_request(payload, self.platform_code, self.private_key)

    def unwrap(self, raw: Union[bytes, str], target: Any = None) -> Any:
        return unwrap(raw, self.public_key, target)

    def request(self, path: str, payload: Any, target: Any = None) -> Any:
        url = self.gateway + path
        body = self.build_request(payload)
        res = self.transport.post(url, body, timeout=self.timeout)
        if not res.ok:
            text = res.body.decode("utf-8", errors="replace")
            log.error(f"[XPAY REQ] {url} → {res.status_code}: {text}")
            raise TransportError(f"response({res.status_code}):{text}", status_code=res.status_code, body=res.body)
        return self.unwrap(res.body, target)

    # ------------------------------------------------------------------
    # Gateway API
    # ------------------------------------------------------------------
    def qr_pay(self, req: QrPayRequest) -> QrPayResponse:
        """Create a QR-code trade; returns the pay URL and QR image URL."""
        return self.request(PATH_QR_PAY, req, QrPayResponse)

    def query(self, req: QueryRequest) -> OrderItem:
        return self.request(PATH_QUERY, req, OrderItem)

    def parse_notification(self, body: Union[bytes, str], target: Any = OrderItem) -> Any:
        """
        Authenticate and decode a payment notification pushed by the gateway.

        `body` is the raw HTTP request body as received by the merchant's
        web handler. Each call is independent.
        """
        return self.unwrap(body, target)
