"""
Authentication service route handlers.

Provides routes for:
- User registration
- User login

All JWT logic is delegated to `auth_service.utils`.
"""

import logging
import re
from typing import Any, Dict, Optional, Tuple

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from flask import Blueprint, Response, jsonify, request

from backend.auth_service.utils import get_token_issuer
from backend.database.db_connection import DuplicateRecord, StoreError
from backend.database.stores import get_stores

auth_bp = Blueprint("auth", __name__)
ph = PasswordHasher()

# --- CONSTANTS FOR VALIDATION ---
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PASSWORD_MIN_LENGTH = 8
NAME_MIN_LENGTH = 4


# --- REQUEST LOGGING ---
@auth_bp.before_request
def before_request() -> None:
    logging.info(f"[Auth] Incoming {request.method} {request.path}")


@auth_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Auth] Response {response.status}")
    return response


def _credentials_body(*keys: str) -> Tuple[Optional[Dict[str, str]], Optional[str]]:
    """
    Read the string fields `keys` from a JSON object body.

    Missing fields come back as empty strings; non-string values are rejected.

    Returns:
        tuple: (fields, error). `error` is set when the body is not a JSON
               object or a field is not a string.
    """
    data: Any = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, "Request body must be a JSON object"

    fields = {key: data.get(key, "") for key in keys}
    for key, value in fields.items():
        if not isinstance(value, str):
            return None, f"{key} must be a string"
    return fields, None


# --- REGISTER ---
@auth_bp.route("/register", methods=["POST"])
def register() -> Tuple[Response, int]:
    """
    Register a new user in the system.

    Expects a JSON body with:
    - email (str): Unique email address.
    - password (str): Minimum 8 characters.
    - name (str): Minimum 4 characters.

    Returns:
        200: The created user (id, email, name). The password hash is never returned.
        400: Missing fields or invalid input.
        409: Email already registered.
        500: Server-side error (hashing or database).
    """
    data, err = _credentials_body("email", "password", "name")
    if err:
        return jsonify({"error": err}), 400
    email: str = data["email"].strip().lower()
    password: str = data["password"]
    name: str = data["name"].strip()

    # Validate input
    if not email or not password or not name:
        return jsonify({"error": "Email, password and name are required"}), 400
    if not EMAIL_RE.match(email):
        return jsonify({"error": "Invalid email address"}), 400
    if len(password) < PASSWORD_MIN_LENGTH:
        return jsonify({"error": f"Password must be at least {PASSWORD_MIN_LENGTH} characters"}), 400
    if len(name) < NAME_MIN_LENGTH:
        return jsonify({"error": f"Name must be at least {NAME_MIN_LENGTH} characters"}), 400

    # Hash password using Argon2
    try:
        pw_hash = ph.hash(password)
    except Exception as e:
        logging.error(f"[Auth] Password hashing failed: {e}")
        return jsonify({"error": "Password hashing failed"}), 500

    try:
        user = get_stores().users.insert(email, name, pw_hash)
    except DuplicateRecord:
        return jsonify({"error": "Email already exists"}), 409
    except StoreError as e:
        logging.error(f"[Auth] Registration failed: {e}")
        return jsonify({"error": "Registration failed"}), 500

    return jsonify(user.to_dict()), 200


# --- LOGIN ---
@auth_bp.route("/login", methods=["POST"])
def login() -> Tuple[Response, int]:
    """
    Authenticate a user and return a JWT.

    Expects a JSON body with:
    - email (str)
    - password (str)

    Unknown emails and wrong passwords get the same 401 so that callers
    cannot probe which emails are registered.

    Returns:
        200: {"token": <jwt>}
        400: Malformed credentials.
        401: Invalid credentials.
        500: Database error.
    """
    data, err = _credentials_body("email", "password")
    if err:
        return jsonify({"error": "Invalid email or password"}), 400
    email: str = data["email"].strip().lower()
    password: str = data["password"]

    if not EMAIL_RE.match(email) or len(password) < PASSWORD_MIN_LENGTH:
        return jsonify({"error": "Invalid email or password"}), 400

    try:
        user = get_stores().users.get_by_email(email)
    except StoreError as e:
        logging.error(f"[Auth] Login lookup failed: {e}")
        return jsonify({"error": "Something went wrong"}), 500

    if not user:
        return jsonify({"error": "Invalid email or password"}), 401

    # Verify password against hash
    try:
        ph.verify(user.password_hash, password)
    except (VerificationError, InvalidHashError):
        return jsonify({"error": "Invalid email or password"}), 401

    try:
        token = get_token_issuer().issue(user)
    except Exception as e:
        logging.error(f"[Auth] Token generation failed: {e}")
        return jsonify({"error": "Error generating token"}), 500

    return jsonify({"token": token}), 200
