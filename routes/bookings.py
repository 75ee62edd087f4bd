from sqlalchemy.exc import IntegrityError

from flask import Blueprint, request, jsonify, current_app
from security.view_gate import get_view_state, require_view_mode
from services import booking_service
from services.booking_service import BookingRequest
from services.errors import BookingNotAllowed
from services.view_mode import ViewMode
from utils.audit import log_event
from utils.serializers import booking_to_dict

booking_bp = Blueprint("booking", __name__, url_prefix="/bookings")


def _can_view_instructor(instructor_id) -> bool:
    state = get_view_state()
    if state.mode == ViewMode.ADMIN:
        return True
    return state.mode == ViewMode.INSTRUCTOR and state.current_instructor_id == instructor_id


# ---------- STUDENTS: book a class ----------
@booking_bp.post("")
def create_booking():
    data = request.get_json(silent=True) or {}
    class_id = data.get("music_class_id") or data.get("class_id")
    student_name = (data.get("student_name") or "").strip()
    student_email = (data.get("student_email") or "").strip()

    if not class_id or not student_name or not student_email:
        return jsonify(error="music_class_id, student_name, student_email are required"), 400
    try:
        class_id = int(class_id)
    except (TypeError, ValueError):
        return jsonify(error="music_class_id must be an integer"), 400

    booking_request = BookingRequest(
        music_class_id=class_id,
        student_name=student_name,
        student_email=student_email,
        student_phone=(data.get("student_phone") or "").strip(),
        notes=(data.get("notes") or "").strip() or None,
    )

    try:
        booking = booking_service.create_booking(booking_request)
    except BookingNotAllowed as e:
        log_event("BOOKING_REJECTED", entity="music_class", entity_id=class_id)
        return jsonify(error=str(e)), 409
    except IntegrityError:
        # only uq_booking_class_confirmed means another booking won the race
        if not booking_service.has_confirmed_booking(class_id):
            raise
        log_event("BOOKING_FAIL_ALREADY_BOOKED", entity="music_class", entity_id=class_id)
        return jsonify(error="Class already booked"), 409

    log_event("BOOKING_CREATE", entity="booking", entity_id=booking.id, metadata={"music_class_id": class_id})
    return jsonify(booking_to_dict(booking)), 201


@booking_bp.get("/validate/<int:class_id>")
def validate_booking(class_id: int):
    return jsonify(music_class_id=class_id, bookable=booking_service.validate_booking(class_id)), 200


# ---------- cancel (idempotent: unknown ids succeed) ----------
@booking_bp.post("/<int:booking_id>/cancel")
def cancel_booking(booking_id: int):
    booking_service.cancel_booking(booking_id)

    log_event("BOOKING_CANCEL", entity="booking", entity_id=booking_id)
    return jsonify(message="Cancelled"), 200


# ---------- ADMIN: list all bookings ----------
@booking_bp.get("")
@require_view_mode(ViewMode.ADMIN)
def list_all_bookings():
    limit = current_app.config.get("BOOKINGS_LIST_LIMIT", 200)
    rows = booking_service.get_all_bookings(limit=limit)
    return jsonify([booking_to_dict(b) for b in rows]), 200


@booking_bp.get("/<int:booking_id>")
@require_view_mode(ViewMode.INSTRUCTOR)
def get_booking(booking_id: int):
    booking = booking_service.get_booking_by_id(booking_id)
    if not booking or not _can_view_instructor(booking.music_class.instructor_id):
        return jsonify(error="Booking not found"), 404
    return jsonify(booking_to_dict(booking)), 200


# ---------- INSTRUCTOR: bookings for my classes ----------
@booking_bp.get("/instructor/<int:instructor_id>")
@require_view_mode(ViewMode.INSTRUCTOR)
def list_instructor_bookings(instructor_id: int):
    if not _can_view_instructor(instructor_id):
        return jsonify(error="Forbidden"), 403
    rows = booking_service.get_bookings_by_instructor(instructor_id)
    return jsonify([booking_to_dict(b) for b in rows]), 200
