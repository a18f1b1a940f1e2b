import datetime as dt
from functools import wraps
from flask import request, jsonify, current_app
import jwt
from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(plain: str) -> str:
    return generate_password_hash(plain)


def create_token(user) -> str:
    now = dt.datetime.utcnow()
    expires = dt.timedelta(minutes=current_app.config.get("JWT_EXPIRES_MINUTES", 60))
    payload = {
        "sub": str(user.id),
        "username": user.username,
        "is_setup_complete": bool(user.is_setup_complete),
        "iat": int(now.timestamp()),
        "exp": int((now + expires).timestamp()),
    }
    return jwt.encode(payload, current_app.config["SECRET_KEY"], algorithm="HS256")


def decode_token(token: str):
    return jwt.decode(token, current_app.config["SECRET_KEY"], algorithms=["HS256"])


def _bearer_token() -> str:
    auth_header = request.headers.get("Authorization", "").strip()
    if auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip()
    # Older clients send the bare token
    return auth_header


def require_auth(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return jsonify({"error": {"code": "UNAUTHORIZED", "message": "Access denied. No token provided."}}), 401
        try:
            payload = decode_token(token)
            request.user_id = int(payload["sub"])  # type: ignore
            request.username = payload.get("username")  # type: ignore
        except jwt.ExpiredSignatureError:
            return jsonify({"error": {"code": "UNAUTHORIZED", "message": "Token expired"}}), 401
        except (jwt.InvalidTokenError, KeyError, ValueError):
            return jsonify({"error": {"code": "UNAUTHORIZED", "message": "Invalid token"}}), 401
        return f(*args, **kwargs)
    return wrapper

__all__ = ["hash_password", "create_token", "decode_token", "require_auth", "check_password_hash"]
