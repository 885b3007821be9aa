"""
Shared authentication helpers.
Provides token creation, verification, and the event ownership check.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import jwt
from flask import Response, current_app, g, jsonify, request

from backend.database.db_connection import StoreError
from backend.database.models import Event, User
from backend.database.stores import get_stores

JWT_ALGORITHM = "HS256"
BEARER_PREFIX = "Bearer "


class TokenIssuer:
    """
    Signs and verifies session tokens with a process-wide HMAC secret.

    Args:
        secret (str): The signing secret.
        expiration_minutes (int): Token lifetime. Defaults to 24 hours.
    """

    def __init__(self, secret: str, expiration_minutes: int = 1440) -> None:
        self.secret = secret
        self.expiration_minutes = expiration_minutes

    def issue(self, user: User) -> str:
        """
        Generates a new JWT for a given user.

        The issuer claim carries the user id as well; nothing reads it.

        Returns:
            str: Encoded JWT string.
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.id),
            "name": user.name,
            "iss": str(user.id),
            "iat": now,
            "exp": now + timedelta(minutes=self.expiration_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=JWT_ALGORITHM)

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify a token's signature, algorithm and expiry.

        Raises:
            jwt.ExpiredSignatureError: If the token has expired.
            jwt.InvalidTokenError: For any other verification failure.
        """
        return jwt.decode(
            token,
            self.secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )


def get_token_issuer() -> TokenIssuer:
    return current_app.extensions["token_issuer"]


def _unauthorized(message: str) -> Tuple[None, Response, int]:
    return None, jsonify({"error": message}), 401


# --- JWT VALIDATION ---
def verify_token_from_request() -> Tuple[Optional[User], Optional[Response], Optional[int]]:
    """
    Authenticate the current request from its Authorization header.

    On success the user is also stored on `flask.g.current_user`.

    Returns:
        tuple: (user, error_response, status_code)
               If successful, error_response and status_code are None.
               If failed, user is None and status_code is 401.
    """
    auth = request.headers.get("Authorization")
    if not auth:
        return _unauthorized("Authorization header is required")

    if not auth.startswith(BEARER_PREFIX):
        return _unauthorized("Bearer token is required")

    token = auth[len(BEARER_PREFIX):].strip()

    try:
        payload = get_token_issuer().decode(token)
    except jwt.ExpiredSignatureError:
        return _unauthorized("Token expired")
    except jwt.InvalidTokenError as e:
        logging.info(f"[Auth] Rejected token: {e}")
        return _unauthorized("Token invalid")

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        return _unauthorized("Token invalid")

    try:
        user = get_stores().users.get_by_id(user_id)
    except StoreError as e:
        logging.error(f"[Auth] User lookup failed for token subject {user_id}: {e}")
        return _unauthorized("Unauthorized access")

    if user is None:
        return _unauthorized("Unauthorized access")

    g.current_user = user
    return user, None, None


def is_owner(event: Event, user: User) -> bool:
    """
    True if `user` owns `event` and may therefore change it or its attendees.
    """
    return event.owner_id == user.id
