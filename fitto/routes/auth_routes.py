from flask import Blueprint
from fitto.controllers.auth_controller import login_handler, register_handler, logout_handler
from fitto.utils.auth import require_auth

auth_bp = Blueprint("auth", __name__, url_prefix="/api")

@auth_bp.post("/login")
def login():
    return login_handler()


@auth_bp.post("/register")
def register():
    return register_handler()


@auth_bp.post("/logout")
@require_auth
def logout():
    return logout_handler()
