from flask import Blueprint, request, jsonify

from models import db
from models.enums import parse_enum
from models.instructor import Instructor
from security.view_gate import get_view_state
from services.view_mode import ViewMode
from utils.audit import log_event

view_mode_bp = Blueprint("view_mode", __name__, url_prefix="/view-mode")


def _state_payload(state):
    return {"mode": state.mode.name, "instructor_id": state.current_instructor_id}


@view_mode_bp.get("")
def get_view_mode():
    return jsonify(_state_payload(get_view_state())), 200


@view_mode_bp.put("")
def set_view_mode():
    data = request.get_json(silent=True) or {}
    try:
        mode = parse_enum(ViewMode, data.get("mode"))
    except ValueError:
        return jsonify(error="mode must be one of PUBLIC, ADMIN, INSTRUCTOR"), 400

    instructor_id = data.get("instructor_id")
    if instructor_id is not None:
        if mode != ViewMode.INSTRUCTOR:
            return jsonify(error="instructor_id only applies to INSTRUCTOR mode"), 400
        try:
            instructor_id = int(instructor_id)
        except (TypeError, ValueError):
            return jsonify(error="instructor_id must be an integer"), 400
        if db.session.get(Instructor, instructor_id) is None:
            return jsonify(error="Instructor not found"), 404

    state = get_view_state()
    changed = state.set_mode(mode)
    if instructor_id is not None:
        state.current_instructor_id = instructor_id

    log_event("VIEW_MODE_SET", metadata={"mode": mode.name, "changed": changed, "instructor_id": instructor_id})
    return jsonify(_state_payload(state)), 200
