import logging
from typing import Optional

from sqlalchemy.orm import joinedload, selectinload

from models import db
from models.enums import ClassStatus, SkillLevel
from models.music_class import MusicClass
from utils.clock import utcnow
from utils.transaction import atomic

logger = logging.getLogger(__name__)


def _upcoming():
    return MusicClass.query.filter(MusicClass.scheduled_at > utcnow())


def _upcoming_available():
    return (
        _upcoming()
        .options(joinedload(MusicClass.instructor))
        .filter(MusicClass.status == ClassStatus.AVAILABLE)
    )


def get_available_classes():
    return _upcoming_available().order_by(MusicClass.scheduled_at.asc()).all()


def get_classes_by_instructor(instructor_id: int):
    # any status: the instructor sees booked slots too
    return (
        _upcoming()
        .options(joinedload(MusicClass.instructor), selectinload(MusicClass.bookings))
        .filter(MusicClass.instructor_id == instructor_id)
        .order_by(MusicClass.scheduled_at.asc())
        .all()
    )


def get_classes_by_instrument(instrument: str):
    return (
        _upcoming_available()
        .filter(MusicClass.instrument == instrument)
        .order_by(MusicClass.scheduled_at.asc())
        .all()
    )


def get_classes_by_skill_level(level: SkillLevel):
    return (
        _upcoming_available()
        .filter(MusicClass.level == level)
        .order_by(MusicClass.scheduled_at.asc())
        .all()
    )


def get_class_by_id(class_id: int) -> Optional[MusicClass]:
    return (
        MusicClass.query
        .options(joinedload(MusicClass.instructor), selectinload(MusicClass.bookings))
        .filter(MusicClass.id == class_id)
        .first()
    )


def create_class(music_class: MusicClass) -> MusicClass:
    with atomic() as session:
        session.add(music_class)
    logger.info("Class %s created for instructor %s", music_class.id, music_class.instructor_id)
    return music_class


def update_class(music_class: MusicClass) -> MusicClass:
    with atomic() as session:
        music_class = session.merge(music_class)
    return music_class


def delete_class(class_id: int) -> None:
    with atomic() as session:
        music_class = session.get(MusicClass, class_id)
        if music_class is None:
            return
        # bookings go with it (ORM delete-orphan + ON DELETE CASCADE)
        session.delete(music_class)
    logger.info("Class %s deleted", class_id)


def cancel_class(class_id: int) -> Optional[MusicClass]:
    with atomic() as session:
        music_class = session.get(MusicClass, class_id)
        if music_class is None:
            return None
        music_class.mark_cancelled()
    return music_class


def complete_class(class_id: int) -> Optional[MusicClass]:
    with atomic() as session:
        music_class = session.get(MusicClass, class_id)
        if music_class is None:
            return None
        music_class.mark_completed()
    return music_class


def get_available_instruments():
    rows = (
        db.session.query(MusicClass.instrument)
        .filter(
            MusicClass.status == ClassStatus.AVAILABLE,
            MusicClass.scheduled_at > utcnow(),
        )
        .distinct()
        .all()
    )
    # exact, case-sensitive code point order regardless of database collation
    return sorted(r[0] for r in rows)
