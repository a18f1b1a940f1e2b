from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from flask import current_app
from fitto.extensions import db
from fitto.models.user import User
from fitto.schemas.user_schema import RegisterSchema, LoginSchema
from fitto.utils.auth import create_token, check_password_hash, hash_password
from fitto.utils.http import ok, error, json_body, validate_schema


def _user_payload(user: User):
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "isSetupComplete": user.is_setup_complete,
    }


def login_handler():
    data, errors = validate_schema(LoginSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "username and password required", 400, fields=errors)

    username = (data.get("username") or "").strip()
    email = (data.get("email") or "").strip().lower()
    user = User.query.filter(or_(User.username == username, User.email == email)).first()
    if not user or not check_password_hash(user.password, data["password"]):
        return error("INVALID_CREDENTIALS", "Invalid username or password", 401)

    return ok({
        "message": "Login successful",
        "token": create_token(user),
        "user": _user_payload(user),
    })


def register_handler():
    data, errors = validate_schema(RegisterSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "username, email and password required", 400, fields=errors)

    username = data["username"].strip()
    email = data["email"].strip().lower()
    exists = User.query.filter(or_(User.username == username, User.email == email)).first()
    if exists:
        return error("USER_EXISTS", "User already exists", 409)

    try:
        user = User(username=username, email=email, password=hash_password(data["password"]), is_setup_complete=False)
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # lost a race with a concurrent registration for the same username or email
        db.session.rollback()
        return error("USER_EXISTS", "User already exists", 409)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Registration Error: {str(e)}")
        return error("PERSISTENCE_ERROR", "Server error", 500)

    return ok({
        "message": "User registered successfully",
        "token": create_token(user),
        "user": _user_payload(user),
    }, 201)


def logout_handler():
    """
    Tokens are stateless, so the client discards its token; this endpoint
    only confirms the logout.
    """
    return ok({"message": "Logged out successfully"})
