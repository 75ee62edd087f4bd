from .health import health_bp
from .view_mode import view_mode_bp
from .instructors import instructor_bp
from .classes import class_bp
from .bookings import booking_bp
from .audit_logs import audit_bp
