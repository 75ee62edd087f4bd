from functools import wraps
from flask import current_app, jsonify

from services.view_mode import ViewMode


def get_view_state():
    return current_app.extensions["view_mode"]


def in_mode(mode: ViewMode) -> bool:
    return get_view_state().mode == mode


def require_view_mode(*modes: ViewMode):
    """
    Usage: @require_view_mode(ViewMode.INSTRUCTOR)
    ADMIN passes every gate.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            current = get_view_state().mode
            if current != ViewMode.ADMIN and current not in modes:
                return jsonify(error="Forbidden"), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator
