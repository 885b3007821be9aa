"""
Attendee routes: manage who attends an event.

Listing is public. Adding or removing attendees is reserved to the event's
owner, and a user can attend a given event only once.
"""

import logging
from typing import Tuple

from flask import Blueprint, Response, jsonify, request

from backend.auth_service.utils import is_owner, verify_token_from_request
from backend.database.db_connection import DuplicateRecord, StoreError
from backend.database.stores import get_stores
from backend.events_service.routes import load_event
from backend.events_service.validation import parse_id

attendees_bp = Blueprint("attendees", __name__)


@attendees_bp.before_request
def before_request() -> None:
    logging.info(f"[Attendees] Incoming {request.method} {request.path}")


@attendees_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Attendees] Response {response.status}")
    return response


@attendees_bp.route("/events/<event_id>/attendees", methods=["GET"])
def get_attendees_for_event(event_id: str) -> Tuple[Response, int]:
    """
    List the users attending an event (id, name and email only).
    """
    eid = parse_id(event_id)
    if eid is None:
        return jsonify({"error": "Invalid event ID"}), 400

    try:
        users = get_stores().attendees.users_for_event(eid)
    except StoreError as e:
        logging.error(f"[Attendees] Database error listing attendees of event {eid}: {e}")
        return jsonify({"error": "Failed to retrieve attendees for event"}), 500

    return jsonify([u.to_dict() for u in users]), 200


@attendees_bp.route("/attendees/<attendee_id>/events", methods=["GET"])
def get_events_for_attendee(attendee_id: str) -> Tuple[Response, int]:
    """
    List the events a user attends.
    """
    uid = parse_id(attendee_id)
    if uid is None:
        return jsonify({"error": "Invalid attendee ID"}), 400

    try:
        events = get_stores().attendees.events_for_user(uid)
    except StoreError as e:
        logging.error(f"[Attendees] Database error listing events of user {uid}: {e}")
        return jsonify({"error": "Failed to get events"}), 500

    return jsonify([e.to_dict() for e in events]), 200


@attendees_bp.route("/events/<event_id>/attendees/<user_id>", methods=["POST"])
def add_attendee(event_id: str, user_id: str) -> Tuple[Response, int]:
    """
    Add a user to an event's attendee list.

    Returns:
        201: The new attendee record.
        400: Invalid IDs.
        401: Not authenticated.
        403: Caller does not own the event.
        404: Event or user not found.
        409: User already attends the event.
    """
    user, err, code = verify_token_from_request()
    if err:
        return err, code

    uid = parse_id(user_id)
    if uid is None:
        return jsonify({"error": "Invalid user ID"}), 400

    event, err, code = load_event(event_id)
    if err:
        return err, code

    stores = get_stores()

    try:
        target = stores.users.get_by_id(uid)
    except StoreError as e:
        logging.error(f"[Attendees] Database error loading user {uid}: {e}")
        return jsonify({"error": "Failed to retrieve user"}), 500

    if target is None:
        return jsonify({"error": "User not found"}), 404

    if not is_owner(event, user):
        return jsonify({"error": "You are not authorized to add an attendee"}), 403

    try:
        if stores.attendees.find(event.id, target.id) is not None:
            return jsonify({"error": "Attendee already exists"}), 409
        attendee = stores.attendees.insert(event.id, target.id)
    except DuplicateRecord:
        # Lost a race with a concurrent add; the unique constraint caught it.
        return jsonify({"error": "Attendee already exists"}), 409
    except StoreError as e:
        logging.error(f"[Attendees] Database error adding user {uid} to event {event.id}: {e}")
        return jsonify({"error": "Failed to add attendee"}), 500

    return jsonify(attendee.to_dict()), 201


@attendees_bp.route("/events/<event_id>/attendees/<user_id>", methods=["DELETE"])
def remove_attendee(event_id: str, user_id: str) -> Tuple[Response, int]:
    """
    Remove a user from an event's attendee list. Idempotent.
    """
    user, err, code = verify_token_from_request()
    if err:
        return err, code

    uid = parse_id(user_id)
    if uid is None:
        return jsonify({"error": "Invalid user ID"}), 400

    event, err, code = load_event(event_id)
    if err:
        return err, code

    if not is_owner(event, user):
        return jsonify({"error": "You are not authorized to delete an attendee from event"}), 403

    try:
        get_stores().attendees.delete(event.id, uid)
    except StoreError as e:
        logging.error(f"[Attendees] Database error removing user {uid} from event {event.id}: {e}")
        return jsonify({"error": "Failed to delete attendee"}), 500

    return "", 204
