import json
import pytest
from xpay_client.crypto import generate_keypair, sign_envelope
from xpay_client.envelope import ResponseEnvelope


@pytest.fixture(scope="session")
def app_keys():
    """Merchant key pair: private half signs requests."""
    return generate_keypair()


@pytest.fixture(scope="session")
def xpay_keys():
    """Gateway key pair: private half signs responses and notifications."""
    return generate_keypair()


@pytest.fixture(scope="session")
def other_keys():
    return generate_keypair()


def signed_response(priv, code="0000", msg="success", content=None, ts=1700000000) -> bytes:
    if content is not None and not isinstance(content, str):
        content = json.dumps(content)
    env = ResponseEnvelope(timestamp=ts, code=code, msg=msg, content=content or "")
    sign_envelope(env, priv)
    return env.to_json_bytes()
