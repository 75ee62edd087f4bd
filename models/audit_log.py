from models.db import db
from utils.clock import utcnow

class AuditLog(db.Model):
    __tablename__ = "audit_logs"

    id = db.Column(db.Integer, primary_key=True)
    view_mode = db.Column(db.String(20), nullable=True)  # PUBLIC, ADMIN, INSTRUCTOR
    instructor_id = db.Column(db.Integer, nullable=True)  # selected instructor in INSTRUCTOR mode
    action = db.Column(db.String(80), nullable=False)  # e.g. BOOKING_CREATE, CLASS_DELETE
    entity = db.Column(db.String(80), nullable=True)   # e.g. booking, music_class
    entity_id = db.Column(db.String(80), nullable=True)

    ip = db.Column(db.String(64), nullable=True)
    user_agent = db.Column(db.String(255), nullable=True)
    metadata_json = db.Column(db.Text, nullable=True)

    timestamp = db.Column(db.DateTime, default=utcnow, nullable=False)
