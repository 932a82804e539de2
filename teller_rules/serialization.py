"""Serialization of entities and decisions into JSON-safe payloads."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from teller_rules.models.base import Decision


def _fields_to_dict(obj: Any) -> dict:
    """Convert a flat dataclass without deep-copying it.

    Nested dataclasses (an account's plan) are still serialized
    recursively through ``serialize_value``.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return _fields_to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_value(v) for v in value]
    return value


def decision_to_response(decision: Decision) -> dict[str, Any]:
    """Render a decision the way the console forms consume it.

    Approved decisions carry the approval payload; rejected ones carry the
    field-keyed ``errors`` map plus the full violation list.
    """
    if decision.approved:
        return {"approved": True, "approval": serialize_value(decision.approval)}
    return {
        "approved": False,
        "errors": decision.errors,
        "violations": [
            {
                "field": v.field,
                "rule": v.rule,
                "message": v.message,
                "details": serialize_value(v.details),
            }
            for v in decision.violations
        ],
    }
