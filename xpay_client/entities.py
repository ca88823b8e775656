# xpay_client/entities.py

from __future__ import annotations
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, get_type_hints

_WIRE_TYPES = {str: "string", int: "integer"}


def _typed_fields(cls, data: Any) -> Dict[str, Any]:
    """
    Pick the known fields out of a decoded JSON object, checking each value
    against the field's annotation. Unknown keys and nulls are skipped.
    Raises TypeError when the object or a field has the wrong JSON type.
    """
    if not isinstance(data, dict):
        raise TypeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")
    hints = get_type_hints(cls)
    out = {}
    for f in fields(cls):
        value = data.get(f.name)
        if value is None:
            continue
        expected = hints[f.name]
        # bool is an int subclass but never a valid integer field
        if isinstance(value, bool) or not isinstance(value, expected):
            raise TypeError(
                f"{cls.__name__}.{f.name} must be a {_WIRE_TYPES.get(expected, expected.__name__)}, "
                f"got {type(value).__name__}"
            )
        out[f.name] = value
    return out


@dataclass
class QrPayRequest:
    """
    QR-code trade creation.

    Amounts are in the smallest currency unit (cents/fen).
    `business_params` is echoed back verbatim in the payment notification
    (max 500 characters).
    """
    merchant: str                # receiving merchant account
    total_amount: int
    trade_no: str                # unique order number on the merchant side
    product_code: str            # PRODUCT_CODE_*
    notify_url: str
    subject: str
    body: str
    currency: str = ""
    business_params: str = ""

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        if not d["business_params"]:
            del d["business_params"]
        return d


@dataclass
class QrPayResponse:
    pay_url: str = ""
    img_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QrPayResponse":
        return cls(**_typed_fields(cls, data))


@dataclass
class QueryRequest:
    trade_no: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class OrderItem:
    """Order record returned by a query and pushed in payment notifications."""
    merchant: str = ""
    order_no: str = ""
    platform_code: str = ""
    out_trade_no: str = ""       # merchant-side trade_no
    request_no: str = ""
    product_code: str = ""
    business_params: str = ""
    order_type: int = 0          # ORDER_TYPE_*
    created_at: int = 0          # unix seconds
    finish_time: int = 0         # unix seconds
    total_amount: int = 0
    status: int = 0              # ORDER_STATUS_*
    subject: str = ""
    body: str = ""
    channel_order_no: str = ""
    progress: str = ""
    source_order_no: str = ""    # refunds only

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderItem":
        return cls(**_typed_fields(cls, data))
