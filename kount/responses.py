"""
Response mapping and the typed objects returned by the client.

Every create/update call returns an Outcome:
- RiskResponse for HTTP 200 (the order was scored / updated)
- ErrorResponse for anything else (the API rejected the request)

Keys are converted to snake_case before any object is built, so attribute
names match the API documentation's fields in snake form. Nested objects are
built defensively: a missing or null sub-object yields an empty instance.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional

from kount.errors import ParseError
from kount.transforms import to_domain_keys


class RiskDecision(str, Enum):
    APPROVE = "APPROVE"
    DECLINE = "DECLINE"
    REVIEW = "REVIEW"


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _sequence(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


# ---------------------------------------------------------------------------
# Domain objects
# ---------------------------------------------------------------------------

@dataclass
class Persona:
    unique_cards: Optional[int] = None
    unique_devices: Optional[int] = None
    unique_emails: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Persona":
        data = _mapping(data)
        return cls(
            unique_cards=data.get("unique_cards"),
            unique_devices=data.get("unique_devices"),
            unique_emails=data.get("unique_emails"),
        )


@dataclass
class Segment:
    id: Optional[str] = None
    name: Optional[str] = None
    priority: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Segment":
        data = _mapping(data)
        return cls(id=data.get("id"), name=data.get("name"), priority=data.get("priority"))


@dataclass
class SegmentExecuted:
    segment: Segment = field(default_factory=Segment)
    policies_executed: List[Any] = field(default_factory=list)
    tags: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "SegmentExecuted":
        data = _mapping(data)
        return cls(
            segment=Segment.from_dict(data.get("segment")),
            policies_executed=_sequence(data.get("policies_executed")),
            tags=_sequence(data.get("tags")),
        )


@dataclass
class RiskInquiry:
    decision: Optional[str] = None
    omniscore: Optional[float] = None
    persona: Persona = field(default_factory=Persona)
    device: Any = None
    segment_executed: SegmentExecuted = field(default_factory=SegmentExecuted)

    @classmethod
    def from_dict(cls, data: Any) -> "RiskInquiry":
        data = _mapping(data)
        return cls(
            decision=data.get("decision"),
            omniscore=data.get("omniscore"),
            persona=Persona.from_dict(data.get("persona")),
            device=data.get("device"),
            segment_executed=SegmentExecuted.from_dict(data.get("segment_executed")),
        )

    def is_approved(self) -> bool:
        return self.decision == RiskDecision.APPROVE


@dataclass
class Transaction:
    transaction_id: Optional[str] = None
    merchant_transaction_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Transaction":
        data = _mapping(data)
        return cls(
            transaction_id=data.get("transaction_id"),
            merchant_transaction_id=data.get("merchant_transaction_id"),
        )


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

class Outcome(ABC):
    """Common interface of RiskResponse and ErrorResponse."""

    @abstractmethod
    def is_success(self) -> bool:
        """True when the API accepted the request (HTTP 200)."""

    @abstractmethod
    def is_approved(self) -> bool:
        """True only for a successful response whose decision is APPROVE."""

    @abstractmethod
    def raw_payload(self) -> Any:
        """The full response body, keys already in snake_case."""


@dataclass
class RiskResponse(Outcome):
    raw: Any = field(default_factory=dict)
    order_id: Optional[str] = None
    merchant_order_id: Optional[str] = None
    channel: Optional[str] = None
    device_session_id: Optional[str] = None
    creation_date_time: Optional[str] = None
    risk_inquiry: Optional[RiskInquiry] = None
    transactions: List[Transaction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "RiskResponse":
        order = data.get("order") if isinstance(data, Mapping) else None
        if not isinstance(order, Mapping):
            return cls(raw=data)
        return cls(
            raw=data,
            order_id=order.get("order_id"),
            merchant_order_id=order.get("merchant_order_id"),
            channel=order.get("channel"),
            device_session_id=order.get("device_session_id"),
            creation_date_time=order.get("creation_date_time"),
            risk_inquiry=RiskInquiry.from_dict(order.get("risk_inquiry")),
            transactions=[Transaction.from_dict(t) for t in _sequence(order.get("transactions"))],
        )

    def is_success(self) -> bool:
        return True

    def is_approved(self) -> bool:
        return self.risk_inquiry is not None and self.risk_inquiry.is_approved()

    def raw_payload(self) -> Any:
        return self.raw


@dataclass
class ErrorResponse(Outcome):
    status_code: int
    raw: Any = field(default_factory=dict)

    def is_success(self) -> bool:
        return False

    def is_approved(self) -> bool:
        return False

    def raw_payload(self) -> Any:
        return self.raw


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------

def parse_json(body: str) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ParseError(f"Response body is not valid JSON: {exc}", body=body or "") from exc


def map_response(status_code: int, body: str) -> Outcome:
    data = to_domain_keys(parse_json(body))
    if status_code == 200:
        return RiskResponse.from_dict(data)
    return ErrorResponse(status_code=status_code, raw=data)
