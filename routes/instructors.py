from decimal import Decimal, InvalidOperation
from sqlalchemy.exc import IntegrityError

from flask import Blueprint, request, jsonify
from models import db
from models.instructor import Instructor
from security.view_gate import require_view_mode
from services import instructor_service
from services.view_mode import ViewMode
from utils.audit import log_event
from utils.serializers import instructor_to_dict

instructor_bp = Blueprint("instructor", __name__, url_prefix="/instructors")


def _parse_money(raw):
    try:
        value = Decimal(str(raw if raw is not None else "0"))
    except InvalidOperation:
        raise ValueError("hourly_rate must be a number")
    if value < 0:
        raise ValueError("hourly_rate must not be negative")
    return value.quantize(Decimal("0.01"))


def _parse_flag(raw, default):
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in ("1", "true", "yes"):
        return True
    if text in ("0", "false", "no"):
        return False
    raise ValueError("is_active must be a boolean")


def _instructor_fields(data):
    """Full set of columns from a JSON body; raises ValueError on bad input."""
    name = (data.get("name") or "").strip()
    email = (data.get("email") or "").strip()
    if not name or not email:
        raise ValueError("name and email are required")

    return {
        "name": name,
        "email": email,
        "phone": (data.get("phone") or "").strip(),
        "bio": (data.get("bio") or "").strip(),
        "specialization": (data.get("specialization") or "").strip(),
        "hourly_rate": _parse_money(data.get("hourly_rate")),
        "image_url": (data.get("image_url") or "").strip() or None,
        "is_active": _parse_flag(data.get("is_active"), True),
    }


@instructor_bp.get("")
def list_instructors():
    active = (request.args.get("active") or "").strip().lower()
    if active in ("1", "true", "yes"):
        rows = instructor_service.get_active_instructors()
    else:
        rows = instructor_service.get_all_instructors()
    return jsonify([instructor_to_dict(i) for i in rows]), 200


@instructor_bp.get("/<int:instructor_id>")
def get_instructor(instructor_id: int):
    instructor = instructor_service.get_instructor_by_id(instructor_id)
    if not instructor:
        return jsonify(error="Instructor not found"), 404
    return jsonify(instructor_to_dict(instructor, include_classes=True)), 200


@instructor_bp.post("")
@require_view_mode(ViewMode.ADMIN)
def create_instructor():
    data = request.get_json(silent=True) or {}
    try:
        fields = _instructor_fields(data)
    except ValueError as e:
        return jsonify(error=str(e)), 400

    instructor = instructor_service.create_instructor(Instructor(**fields))

    log_event("INSTRUCTOR_CREATE", entity="instructor", entity_id=instructor.id)
    return jsonify(instructor_to_dict(instructor)), 201


@instructor_bp.put("/<int:instructor_id>")
@require_view_mode(ViewMode.ADMIN)
def update_instructor(instructor_id: int):
    if db.session.get(Instructor, instructor_id) is None:
        return jsonify(error="Instructor not found"), 404

    data = request.get_json(silent=True) or {}
    try:
        fields = _instructor_fields(data)
    except ValueError as e:
        return jsonify(error=str(e)), 400

    # PUT replaces the whole row
    instructor = instructor_service.update_instructor(Instructor(id=instructor_id, **fields))

    log_event("INSTRUCTOR_UPDATE", entity="instructor", entity_id=instructor_id)
    return jsonify(instructor_to_dict(instructor)), 200


@instructor_bp.delete("/<int:instructor_id>")
@require_view_mode(ViewMode.ADMIN)
def delete_instructor(instructor_id: int):
    try:
        instructor_service.delete_instructor(instructor_id)
    except IntegrityError:
        log_event("INSTRUCTOR_DELETE_BLOCKED", entity="instructor", entity_id=instructor_id)
        return jsonify(error="Instructor still has classes"), 409

    log_event("INSTRUCTOR_DELETE", entity="instructor", entity_id=instructor_id)
    return jsonify(message="Deleted"), 200
