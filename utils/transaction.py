from contextlib import contextmanager

from models import db


@contextmanager
def atomic():
    """
    Usage:
        with atomic() as session:
            session.add(row)

    Commits when the block exits cleanly, rolls back and re-raises otherwise.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
