"""
XPay Client SDK
===============
Merchant-side client for the XPay hosted payment gateway.

Provides:
- Signed request envelopes (QR-code payment, order query)
- Verification and decoding of gateway responses and payment notifications
- RSA key loading and pluggable HTTP transport
"""

from .client import XPayClient
from .config import ClientConfig
from .constants import (
    SUCCESS_CODE,
    PRODUCT_CODE_WECHAT_QR,
    PRODUCT_CODE_ALIPAY_QR,
    PRODUCT_CODE_INTEGRATION_QR,
)
from .crypto import load_private_key, load_public_key, sign, verify
from .entities import OrderItem, QrPayRequest, QrPayResponse, QueryRequest
from .envelope import RequestEnvelope, ResponseEnvelope, to_canonical_string
from .errors import (
    XPayError,
    EncodingError,
    EnvelopeError,
    PayloadDecodeError,
    TransportError,
    SignatureError,
    RemoteError,
    ConfigError,
)
from .protocol import build_request, unwrap

__version__ = "0.1.0"
