import json
import pytest
from xpay_client.crypto import verify, sign_envelope
from xpay_client.entities import OrderItem, QrPayRequest, QrPayResponse
from xpay_client.envelope import RequestEnvelope, ResponseEnvelope
from xpay_client.errors import (
    EncodingError, EnvelopeError, PayloadDecodeError, RemoteError, SignatureError,
)
from xpay_client.protocol import build_request, unwrap, encode_payload, decode_payload
from conftest import signed_response


def _parse_request(raw: bytes) -> RequestEnvelope:
    return RequestEnvelope(**json.loads(raw))


def test_build_request_end_to_end(app_keys):
    priv, pub = app_keys
    raw = build_request({"trade_no": "T1", "total_amount": 100}, "P1", priv)
    env = _parse_request(raw)

    assert env.platform_code == "P1"
    assert env.content == '{"trade_no":"T1","total_amount":100}'
    assert json.loads(env.content) == {"trade_no": "T1", "total_amount": 100}
    assert env.canonical_string() == (
        f"content={env.content}&platform_code=P1"
        f"&request_no={env.request_no}&timestamp={env.timestamp}"
    )
    assert verify(env, pub, env.sign)


def test_build_request_fixed_metadata(app_keys):
    raw = build_request({"a": 1}, "P1", app_keys[0], request_no="rq-1", timestamp=42)
    env = _parse_request(raw)
    assert env.request_no == "rq-1"
    assert env.timestamp == 42
    assert verify(env, app_keys[1], env.sign)


def test_build_request_unique_request_numbers(app_keys):
    a = _parse_request(build_request({}, "P1", app_keys[0]))
    b = _parse_request(build_request({}, "P1", app_keys[0]))
    assert a.request_no != b.request_no


def test_build_request_accepts_entities(app_keys):
    req = QrPayRequest(merchant="m@example.com", total_amount=100, trade_no="T1",
                       product_code="2001", notify_url="http://h", subject="s", body="b")
    env = _parse_request(build_request(req, "P1", app_keys[0]))
    content = json.loads(env.content)
    assert content["trade_no"] == "T1"
    assert "business_params" not in content
    assert content["currency"] == ""


def test_build_request_unencodable_payload(app_keys):
    with pytest.raises(EncodingError):
        build_request({"when": object()}, "P1", app_keys[0])


def test_unwrap_success(xpay_keys):
    priv, pub = xpay_keys
    raw = signed_response(priv, content={"pay_url": "https://p", "img_url": "https://i"})
    res = unwrap(raw, pub, QrPayResponse)
    assert res == QrPayResponse(pay_url="https://p", img_url="https://i")


def test_unwrap_without_target_returns_json(xpay_keys):
    priv, pub = xpay_keys
    assert unwrap(signed_response(priv, content={"k": [1, 2]}), pub) == {"k": [1, 2]}


def test_unwrap_malformed_envelope(xpay_keys):
    with pytest.raises(EnvelopeError):
        unwrap(b"<html>oops</html>", xpay_keys[1])


def test_unwrap_forged_success_is_signature_error(xpay_keys, other_keys):
    # signed by the wrong party, claims success
    raw = signed_response(other_keys[0], code="0000", content={"order_no": "X"})
    with pytest.raises(SignatureError):
        unwrap(raw, xpay_keys[1], OrderItem)


def test_unwrap_unsigned_success_is_signature_error(xpay_keys):
    raw = json.dumps({"timestamp": 1, "code": "0000", "msg": "ok", "content": "{}"}).encode()
    with pytest.raises(SignatureError):
        unwrap(raw, xpay_keys[1])


def test_unwrap_signature_checked_before_code(xpay_keys, other_keys):
    raw = signed_response(other_keys[0], code="9999", msg="fail")
    with pytest.raises(SignatureError):
        unwrap(raw, xpay_keys[1])


def test_unwrap_tampered_content_is_signature_error(xpay_keys):
    priv, pub = xpay_keys
    d = json.loads(signed_response(priv, content={"total_amount": 100}))
    d["content"] = json.dumps({"total_amount": 1})
    with pytest.raises(SignatureError):
        unwrap(json.dumps(d).encode(), pub)


def test_unwrap_remote_error_skips_content(xpay_keys, monkeypatch):
    priv, pub = xpay_keys
    raw = signed_response(priv, code="9999", msg="trade not found", content="not json at all")

    def boom(*a, **kw):
        raise AssertionError("content must not be decoded")

    monkeypatch.setattr("xpay_client.protocol.decode_payload", boom)
    with pytest.raises(RemoteError) as exc:
        unwrap(raw, pub, OrderItem)
    assert exc.value.code == "9999"
    assert exc.value.message == "trade not found"


def test_unwrap_payload_decode_error_carries_content(xpay_keys):
    priv, pub = xpay_keys
    raw = signed_response(priv, content="{broken")
    with pytest.raises(PayloadDecodeError) as exc:
        unwrap(raw, pub, OrderItem)
    assert exc.value.content == "{broken"


def test_unwrap_payload_wrong_shape(xpay_keys):
    priv, pub = xpay_keys
    with pytest.raises(PayloadDecodeError):
        unwrap(signed_response(priv, content=[1, 2, 3]), pub, OrderItem)


def test_unwrap_payload_wrong_field_types(xpay_keys):
    priv, pub = xpay_keys
    content = {"order_no": ["not", "a", "string"], "total_amount": "lots", "status": {"x": 1}}
    with pytest.raises(PayloadDecodeError) as exc:
        unwrap(signed_response(priv, content=content), pub, OrderItem)
    assert "lots" in exc.value.content


def test_unwrap_empty_content_signature_still_valid(xpay_keys):
    # blank fields drop out of the canonical string on both sides
    priv, pub = xpay_keys
    env = sign_envelope(ResponseEnvelope(timestamp=3, code="0000", msg="", content="{}"), priv)
    assert unwrap(env.to_json_bytes(), pub) == {}


def test_encode_decode_helpers():
    assert encode_payload({"a": "é"}) == '{"a":"é"}'
    assert decode_payload('{"a":1}', dict) == {"a": 1}
    with pytest.raises(PayloadDecodeError):
        decode_payload("", None)
