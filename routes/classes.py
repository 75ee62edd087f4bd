from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from flask import Blueprint, request, jsonify, current_app
from models import db
from models.enums import SkillLevel, parse_enum
from models.instructor import Instructor
from models.music_class import MusicClass
from security.view_gate import get_view_state, require_view_mode
from services import class_service
from services.view_mode import ViewMode
from utils.audit import log_event
from utils.serializers import class_to_dict

class_bp = Blueprint("class", __name__, url_prefix="/classes")


def _parse_iso(dt_str: str):
    # Expect ISO format like "2026-01-20T18:00:00"; offsets are folded into naive UTC
    dt = datetime.fromisoformat(dt_str)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _can_manage(instructor_id) -> bool:
    # INSTRUCTOR mode may only touch the selected instructor's classes
    state = get_view_state()
    if state.mode == ViewMode.ADMIN:
        return True
    return state.mode == ViewMode.INSTRUCTOR and state.current_instructor_id == instructor_id


def _class_fields(data):
    """Full set of editable columns from a JSON body; raises ValueError on bad input."""
    instructor_id = data.get("instructor_id")
    instrument = (data.get("instrument") or "").strip()
    scheduled_at = data.get("scheduled_at")
    if not instructor_id or not instrument or not scheduled_at:
        raise ValueError("instructor_id, instrument, scheduled_at are required")

    try:
        instructor_id = int(instructor_id)
    except (TypeError, ValueError):
        raise ValueError("instructor_id must be an integer")

    try:
        st = _parse_iso(scheduled_at)
    except (TypeError, ValueError):
        raise ValueError("Invalid datetime format. Use ISO e.g. 2026-01-20T18:00:00")

    level = parse_enum(SkillLevel, data.get("level") or SkillLevel.BEGINNER.name)

    default_duration = current_app.config.get("DEFAULT_CLASS_DURATION_MINUTES", 60)
    try:
        duration = int(data.get("duration_minutes") or default_duration)
    except (TypeError, ValueError):
        raise ValueError("duration_minutes must be an integer")
    if duration <= 0:
        raise ValueError("duration_minutes must be positive")

    try:
        price = Decimal(str(data.get("price") or "0")).quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ValueError("price must be a number")
    if price < 0:
        raise ValueError("price must not be negative")

    return {
        "instructor_id": instructor_id,
        "instrument": instrument,
        "level": level,
        "scheduled_at": st,
        "duration_minutes": duration,
        "price": price,
        "description": (data.get("description") or "").strip(),
    }


@class_bp.get("")
def list_classes():
    # optional filters: instrument (exact), level (BEGINNER/INTERMEDIATE/ADVANCED)
    instrument = request.args.get("instrument")
    level = request.args.get("level")

    if instrument:
        rows = class_service.get_classes_by_instrument(instrument)
    elif level:
        try:
            rows = class_service.get_classes_by_skill_level(parse_enum(SkillLevel, level))
        except ValueError:
            return jsonify(error="level must be one of BEGINNER, INTERMEDIATE, ADVANCED"), 400
    else:
        rows = class_service.get_available_classes()

    return jsonify([class_to_dict(c) for c in rows]), 200


@class_bp.get("/instruments")
def list_instruments():
    return jsonify(class_service.get_available_instruments()), 200


@class_bp.get("/<int:class_id>")
def get_class(class_id: int):
    music_class = class_service.get_class_by_id(class_id)
    if not music_class:
        return jsonify(error="Class not found"), 404
    return jsonify(class_to_dict(music_class, include_booking=True)), 200


@class_bp.get("/instructor/<int:instructor_id>")
def list_instructor_classes(instructor_id: int):
    rows = class_service.get_classes_by_instructor(instructor_id)
    return jsonify([class_to_dict(c, include_booking=True) for c in rows]), 200


@class_bp.post("")
@require_view_mode(ViewMode.INSTRUCTOR)
def create_class():
    data = request.get_json(silent=True) or {}
    try:
        fields = _class_fields(data)
    except ValueError as e:
        return jsonify(error=str(e)), 400

    if db.session.get(Instructor, fields["instructor_id"]) is None:
        return jsonify(error="Instructor not found"), 404
    if not _can_manage(fields["instructor_id"]):
        return jsonify(error="Forbidden"), 403

    music_class = class_service.create_class(MusicClass(**fields))

    log_event("CLASS_CREATE", entity="music_class", entity_id=music_class.id)
    return jsonify(class_to_dict(music_class)), 201


@class_bp.put("/<int:class_id>")
@require_view_mode(ViewMode.INSTRUCTOR)
def update_class(class_id: int):
    existing = db.session.get(MusicClass, class_id)
    if existing is None:
        return jsonify(error="Class not found"), 404
    if not _can_manage(existing.instructor_id):
        return jsonify(error="Forbidden"), 403

    data = request.get_json(silent=True) or {}
    try:
        fields = _class_fields(data)
    except ValueError as e:
        return jsonify(error=str(e)), 400

    if db.session.get(Instructor, fields["instructor_id"]) is None:
        return jsonify(error="Instructor not found"), 404
    if not _can_manage(fields["instructor_id"]):
        return jsonify(error="Forbidden"), 403

    # status only moves through bookings or the cancel/complete actions
    music_class = class_service.update_class(
        MusicClass(id=class_id, status=existing.status, **fields)
    )

    log_event("CLASS_UPDATE", entity="music_class", entity_id=class_id)
    return jsonify(class_to_dict(music_class)), 200


@class_bp.delete("/<int:class_id>")
@require_view_mode(ViewMode.INSTRUCTOR)
def delete_class(class_id: int):
    existing = db.session.get(MusicClass, class_id)
    if existing is not None and not _can_manage(existing.instructor_id):
        return jsonify(error="Forbidden"), 403

    class_service.delete_class(class_id)

    log_event("CLASS_DELETE", entity="music_class", entity_id=class_id)
    return jsonify(message="Deleted"), 200


@class_bp.post("/<int:class_id>/cancel")
@require_view_mode(ViewMode.INSTRUCTOR)
def cancel_class(class_id: int):
    existing = db.session.get(MusicClass, class_id)
    if existing is None:
        return jsonify(error="Class not found"), 404
    if not _can_manage(existing.instructor_id):
        return jsonify(error="Forbidden"), 403

    music_class = class_service.cancel_class(class_id)

    log_event("CLASS_CANCEL", entity="music_class", entity_id=class_id)
    return jsonify(class_to_dict(music_class)), 200


@class_bp.post("/<int:class_id>/complete")
@require_view_mode(ViewMode.INSTRUCTOR)
def complete_class(class_id: int):
    existing = db.session.get(MusicClass, class_id)
    if existing is None:
        return jsonify(error="Class not found"), 404
    if not _can_manage(existing.instructor_id):
        return jsonify(error="Forbidden"), 403

    music_class = class_service.complete_class(class_id)

    log_event("CLASS_COMPLETE", entity="music_class", entity_id=class_id)
    return jsonify(class_to_dict(music_class)), 200
