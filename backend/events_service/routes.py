"""
Events service routes: create, read, update and delete events.
Only an event's owner may change or delete it.
"""

import logging
from typing import Optional, Tuple

from flask import Blueprint, Response, jsonify, request

from backend.auth_service.utils import is_owner, verify_token_from_request
from backend.database.db_connection import StoreError
from backend.database.models import Event
from backend.database.stores import get_stores
from backend.events_service.validation import parse_id, validate_event_payload

events_bp = Blueprint("events", __name__)


@events_bp.before_request
def before_request() -> None:
    logging.info(f"[Events] Incoming {request.method} {request.path}")


@events_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Events] Response {response.status}")
    return response


def load_event(raw_id: str) -> Tuple[Optional[Event], Optional[Response], Optional[int]]:
    """
    Parse an event id from the path and fetch the event.

    Returns:
        tuple: (event, error_response, status_code). On failure event is None
               and the status is 400, 404 or 500.
    """
    event_id = parse_id(raw_id)
    if event_id is None:
        return None, jsonify({"error": "Invalid event ID"}), 400

    try:
        event = get_stores().events.get_by_id(event_id)
    except StoreError as e:
        logging.error(f"[Events] Database error loading event {event_id}: {e}")
        return None, jsonify({"error": "Failed to retrieve event"}), 500

    if event is None:
        return None, jsonify({"error": "Event not found"}), 404

    return event, None, None


@events_bp.route("", methods=["GET"])
def list_events() -> Tuple[Response, int]:
    """
    Return all events. Public access.
    """
    try:
        events = get_stores().events.list_all()
    except StoreError as e:
        logging.error(f"[Events] Database error listing events: {e}")
        return jsonify({"error": "Failed to retrieve events"}), 500

    return jsonify([event.to_dict() for event in events]), 200


@events_bp.route("/<event_id>", methods=["GET"])
def get_event(event_id: str) -> Tuple[Response, int]:
    """
    Get a single event by ID.

    Returns:
        200: Event object.
        400: Invalid ID.
        404: Event not found.
    """
    event, err, code = load_event(event_id)
    if err:
        return err, code

    return jsonify(event.to_dict()), 200


@events_bp.route("", methods=["POST"])
def create_event() -> Tuple[Response, int]:
    """
    Create an event owned by the authenticated user.

    Returns:
        201: The created event.
        400: Validation error.
        401: Not authenticated.
        500: Database error.
    """
    user, err, code = verify_token_from_request()
    if err:
        return err, code

    fields, error = validate_event_payload(request.get_json(silent=True))
    if error:
        return jsonify({"error": error}), 400

    try:
        event = get_stores().events.insert(owner_id=user.id, **fields)
    except StoreError as e:
        logging.error(f"[Events] Database error creating event: {e}")
        return jsonify({"error": "Failed to create event"}), 500

    return jsonify(event.to_dict()), 201


@events_bp.route("/<event_id>", methods=["PUT"])
def update_event(event_id: str) -> Tuple[Response, int]:
    """
    Replace the name, description, date and location of an event.

    Returns:
        200: The updated event.
        400: Invalid ID or body.
        401: Not authenticated.
        403: Caller does not own the event.
        404: Event not found.
    """
    user, err, code = verify_token_from_request()
    if err:
        return err, code

    event, err, code = load_event(event_id)
    if err:
        return err, code

    if not is_owner(event, user):
        return jsonify({"error": "You are not authorized to update this event"}), 403

    fields, error = validate_event_payload(request.get_json(silent=True))
    if error:
        return jsonify({"error": error}), 400

    try:
        updated = get_stores().events.update(event.id, **fields)
    except StoreError as e:
        logging.error(f"[Events] Database error updating event {event.id}: {e}")
        return jsonify({"error": "Failed to update event"}), 500

    if updated is None:
        return jsonify({"error": "Event not found"}), 404

    return jsonify(updated.to_dict()), 200


@events_bp.route("/<event_id>", methods=["DELETE"])
def delete_event(event_id: str) -> Tuple[Response, int]:
    """
    Delete an event if the caller owns it.
    """
    user, err, code = verify_token_from_request()
    if err:
        return err, code

    event, err, code = load_event(event_id)
    if err:
        return err, code

    if not is_owner(event, user):
        return jsonify({"error": "You are not authorized to delete this event"}), 403

    try:
        deleted = get_stores().events.delete(event.id)
    except StoreError as e:
        logging.error(f"[Events] Database error deleting event {event.id}: {e}")
        return jsonify({"error": "Failed to delete event"}), 500

    if not deleted:
        return jsonify({"error": "Event not found or already deleted"}), 404

    return "", 204
