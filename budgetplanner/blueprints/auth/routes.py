from flask import Blueprint, request, jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy import or_
from ...extensions import db
from ...models import User

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


def _text(data, key):
    """String field from the request body, stripped; anything else counts as missing."""
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or request.form
    username = _text(data, "username")
    email = _text(data, "email")
    password = data.get("password")
    if not all([username, email, password]) or not isinstance(password, str):
        return jsonify({"ok": False, "message": "All fields are required"}), 400
    if User.query.filter(or_(User.username == username, User.email == email)).first():
        return jsonify({"ok": False, "message": "Username or email already registered"}), 400
    user = User(username=username, email=email)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    current_app.logger.info("Registered user %s", user.id)
    return jsonify({"ok": True, "message": "Account created"}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or request.form
    identifier = _text(data, "identifier")
    password = data.get("password")
    if not identifier or not isinstance(password, str):
        return jsonify({"ok": False, "message": "identifier and password are required"}), 400
    user = User.query.filter(or_(User.email == identifier, User.username == identifier)).first()
    if user and user.check_password(password):
        login_user(user)
        return jsonify({"ok": True, "redirect": "/dashboard"})
    return jsonify({"ok": False, "message": "Invalid credentials"}), 401


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return jsonify({"ok": True, "redirect": "/login"})


@auth_bp.route("/me")
@login_required
def me():
    return jsonify({"id": current_user.id, "username": current_user.username, "email": current_user.email})
