from typing import Optional

from sqlalchemy.orm import selectinload

from models.instructor import Instructor
from utils.transaction import atomic


def get_all_instructors():
    return Instructor.query.order_by(Instructor.name.asc()).all()


def get_active_instructors():
    return (
        Instructor.query
        .filter(Instructor.is_active.is_(True))
        .order_by(Instructor.name.asc())
        .all()
    )


def get_instructor_by_id(instructor_id: int) -> Optional[Instructor]:
    return (
        Instructor.query
        .options(selectinload(Instructor.classes))
        .filter(Instructor.id == instructor_id)
        .first()
    )


def create_instructor(instructor: Instructor) -> Instructor:
    with atomic() as session:
        session.add(instructor)
    return instructor


def update_instructor(instructor: Instructor) -> Instructor:
    with atomic() as session:
        instructor = session.merge(instructor)
    return instructor


def delete_instructor(instructor_id: int) -> None:
    """
    No-op for an unknown id. An instructor who still owns classes is rejected
    by the foreign key and the IntegrityError reaches the caller untouched.
    """
    with atomic() as session:
        instructor = session.get(Instructor, instructor_id)
        if instructor is None:
            return
        session.delete(instructor)
