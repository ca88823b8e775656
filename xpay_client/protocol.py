"""
xpay_client.protocol
--------------------
Outbound: business payload -> signed RequestEnvelope -> bytes.
Inbound:  bytes -> ResponseEnvelope -> signature -> status code -> payload.

Inbound checks run strictly in that order and stop at the first failure:
a response that fails verification is rejected before its code, message or
content are looked at. The same path handles query responses and pushed
notifications.
"""

from __future__ import annotations
from typing import Any, Optional, Union
import json

from cryptography.hazmat.primitives.asymmetric import rsa

from .crypto import sign_envelope, verify_envelope
from .envelope import RequestEnvelope, ResponseEnvelope
from .errors import EncodingError, PayloadDecodeError, RemoteError, SignatureError
from .logger import get_logger
from .utils import payload_json

log = get_logger("XPay.Protocol")


def encode_payload(payload: Any) -> str:
    if hasattr(payload, "to_dict"):
        payload = payload.to_dict()
    try:
        return payload_json(payload)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"cannot encode payload: {e}") from e


def decode_payload(content: str, target: Any = None) -> Any:
    """Decode envelope content. `target` is None/dict for the raw JSON value,
    or a class exposing from_dict()."""
    try:
        data = json.loads(content)
        if target is None or target is dict:
            return data
        return target.from_dict(data)
    except (ValueError, TypeError, AttributeError, KeyError) as e:
        raise PayloadDecodeError(str(e), content) from e


def build_request(
    payload: Any,
    platform_code: str,
    private_key: rsa.RSAPrivateKey,
    *,
    request_no: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> bytes:
    env = RequestEnvelope.make(platform_code, encode_payload(payload))
    if request_no is not None:
        env.request_no = request_no
    if timestamp is not None:
        env.timestamp = timestamp
    sign_envelope(env, private_key)
    log.debug(f"[XPAY REQ] built request_no={env.request_no} platform_code={platform_code}")
    return env.to_json_bytes()


def unwrap(raw: Union[bytes, str], public_key: rsa.RSAPublicKey, target: Any = None) -> Any:
    env = ResponseEnvelope.from_json(raw)
    log.debug(f"[XPAY UNWRAP] envelope parsed ts={env.timestamp}")

    if not verify_envelope(env, public_key):
        log.warning("[XPAY UNWRAP] rejected: signature invalid")
        raise SignatureError("response data sign error")

    if not env.is_success():
        log.info(f"[XPAY UNWRAP] remote error code={env.code} msg={env.msg}")
        raise RemoteError(env.code, env.msg)

    result = decode_payload(env.content, target)
    log.debug("[XPAY UNWRAP] payload decoded")
    return result
