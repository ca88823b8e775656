# xpay_client/config.py
from __future__ import annotations
from dataclasses import dataclass
import os
from .constants import DEFAULT_TIMEOUT
from .errors import ConfigError


@dataclass(frozen=True)
class ClientConfig:
    platform_code: str
    gateway: str
    private_key_path: str
    public_key_path: str
    timeout: float = DEFAULT_TIMEOUT
    transport: str = "http"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        XPAY_PLATFORM_CODE, XPAY_GATEWAY, XPAY_APP_PRIVATE_KEY and
        XPAY_PUBLIC_KEY are required; XPAY_TIMEOUT and XPAY_TRANSPORT
        are optional.
        """
        required = {
            "platform_code": "XPAY_PLATFORM_CODE",
            "gateway": "XPAY_GATEWAY",
            "private_key_path": "XPAY_APP_PRIVATE_KEY",
            "public_key_path": "XPAY_PUBLIC_KEY",
        }
        values = {}
        for field_name, env in required.items():
            v = os.getenv(env, "").strip()
            if not v:
                raise ConfigError(f"{env} is not set")
            values[field_name] = v

        raw_timeout = os.getenv("XPAY_TIMEOUT", "")
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigError(f"XPAY_TIMEOUT must be a number, got {raw_timeout!r}")
            if timeout <= 0:
                raise ConfigError("XPAY_TIMEOUT must be positive")

        return cls(
            timeout=timeout,
            transport=os.getenv("XPAY_TRANSPORT", "http").lower(),
            **values,
        )
