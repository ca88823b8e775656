from __future__ import annotations
from typing import Optional, Tuple
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from .constants import SIGN_HASH
from .envelope import SignableRecord, to_canonical_string
from .errors import ConfigError
from .utils import b64e, b64d

"""
xpay_client.crypto
------------------
RSA signing for XPay envelopes:

- PKCS#1 v1.5 signatures over the envelope canonical string
- sign()/verify() over any SignableRecord, plus envelope helpers
- PEM key loading (PKCS#8 / PKCS#1 private keys, PKIX public keys)

The hash is SHA-1 because that is what the gateway checks; it is a legacy
protocol constraint, not a choice to copy elsewhere.
"""

_HASHES = {"sha1": hashes.SHA1, "sha256": hashes.SHA256}


def _hash() -> hashes.HashAlgorithm:
    return _HASHES[SIGN_HASH]()

# --------- RSA (sign/verify) ----------
def rsa_sign(private_key: rsa.RSAPrivateKey, data: bytes) -> bytes:
    try:
        return private_key.sign(data, padding.PKCS1v15(), _hash())
    except (TypeError, ValueError, AttributeError, UnsupportedAlgorithm) as e:
        raise ConfigError(f"signing key unusable: {e}") from e

def rsa_verify(public_key: rsa.RSAPublicKey, sig: bytes, data: bytes) -> bool:
    try:
        public_key.verify(sig, data, padding.PKCS1v15(), _hash())
        return True
    except Exception:
        return False

def sign(record: SignableRecord, private_key: rsa.RSAPrivateKey) -> str:
    """Base64 signature over the record's canonical string (sign field excluded)."""
    data = to_canonical_string(record.to_string_map()).encode("utf-8")
    return b64e(rsa_sign(private_key, data))

def verify(record: SignableRecord, public_key: rsa.RSAPublicKey, signature_b64: str) -> bool:
    """True only on an exact cryptographic match; never raises."""
    if not signature_b64:
        return False
    try:
        sig = b64d(signature_b64)
    except (ValueError, TypeError):
        return False
    try:
        data = to_canonical_string(record.to_string_map()).encode("utf-8")
    except Exception:
        return False
    return rsa_verify(public_key, sig, data)

# --------- Envelope helpers ----------
def sign_envelope(env, private_key: rsa.RSAPrivateKey):
    env.sign = sign(env, private_key)
    return env

def verify_envelope(env, public_key: rsa.RSAPublicKey) -> bool:
    return verify(env, public_key, env.sign)

# --------- Key material ----------
def load_private_key_pem(data: bytes, password: Optional[bytes] = None) -> rsa.RSAPrivateKey:
    try:
        key = serialization.load_pem_private_key(data, password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise ConfigError(f"cannot parse private key: {e}") from e
    if not isinstance(key, rsa.RSAPrivateKey):
        raise ConfigError(f"private key is not RSA ({type(key).__name__})")
    return key

def load_public_key_pem(data: bytes) -> rsa.RSAPublicKey:
    try:
        key = serialization.load_pem_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise ConfigError(f"cannot parse public key: {e}") from e
    if not isinstance(key, rsa.RSAPublicKey):
        raise ConfigError(f"public key is not RSA ({type(key).__name__})")
    return key

def _read(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ConfigError(f"cannot read key file {path}: {e}") from e

def load_private_key(path: str, password: Optional[bytes] = None) -> rsa.RSAPrivateKey:
    return load_private_key_pem(_read(path), password=password)

def load_public_key(path: str) -> rsa.RSAPublicKey:
    return load_public_key_pem(_read(path))

def generate_keypair(bits: int = 2048) -> Tuple[rsa.RSAPrivateKey, rsa.RSAPublicKey]:
    sk = rsa.generate_private_key(public_exponent=65537, key_size=bits)
    return sk, sk.public_key()

def private_key_to_pem(private_key: rsa.RSAPrivateKey) -> bytes:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )

def public_key_to_pem(public_key: rsa.RSAPublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
