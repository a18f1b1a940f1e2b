import math
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional, Tuple, Type
from flask import request, jsonify
from marshmallow import Schema, ValidationError as SchemaValidationError

def ok(payload: Any, status: int = 200):
    return jsonify(payload), status


def error(code: str, message: str, status: int = 400, **extra):
    body: Dict[str, Any] = {"error": {"code": code, "message": message}}
    if extra:
        body["error"].update(extra)
    return jsonify(body), status

def json_body() -> Dict[str, Any]:
    # force=True allows a missing Content-Type header
    data = request.get_json(force=True, silent=True)
    if isinstance(data, dict):
        return data
    return {}


def validate_schema(schema_cls: Type[Schema], data: Dict[str, Any], partial: bool = False) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
    """Load ``data`` through a marshmallow schema, returning (data, errors)."""
    try:
        return schema_cls().load(data, partial=partial), None
    except SchemaValidationError as e:
        return None, e.messages


def arg_str(name: str, default: Optional[str] = None) -> Optional[str]:
    val = request.args.get(name)
    if val is None:
        return default
    return val


def arg_number(name: str, default: Optional[float] = None, cast: Callable[[str], Any] = float) -> Any:
    """
    Read a numeric query arg. Missing or blank gives ``default``; text that
    is not a finite number raises ValueError.
    """
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return default
    v = cast(raw)
    if not math.isfinite(v):
        raise ValueError(f"{name} must be a finite number")
    return v


def parse_iso_date(value: Any) -> Optional[date]:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value[:10]).date()
        except ValueError:
            return None
    return None
