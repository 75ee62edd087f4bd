from flask import Blueprint, current_app, jsonify, request
from models.audit_log import AuditLog
from security.view_gate import require_view_mode
from services.view_mode import ViewMode

audit_bp = Blueprint("audit", __name__, url_prefix="/admin")


@audit_bp.get("/audit-logs")
@require_view_mode(ViewMode.ADMIN)
def list_audit_logs():
    default_limit = current_app.config.get("BOOKINGS_LIST_LIMIT", 200)
    limit = request.args.get("limit", type=int) or default_limit
    limit = max(1, min(limit, 500))

    action = request.args.get("action")

    q = AuditLog.query
    if action:
        q = q.filter(AuditLog.action == action)

    rows = q.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit).all()
    return jsonify([
        {
            "id": r.id,
            "created_at": r.timestamp.isoformat() if r.timestamp else None,
            "view_mode": r.view_mode,
            "instructor_id": r.instructor_id,
            "action": r.action,
            "entity": r.entity,
            "entity_id": r.entity_id,
            "ip": r.ip,
            "user_agent": r.user_agent,
            "metadata": r.metadata_json,
        }
        for r in rows
    ]), 200
