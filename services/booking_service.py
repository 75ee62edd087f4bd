import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import joinedload

from models import db
from models.booking import Booking
from models.enums import BookingStatus, ClassStatus
from models.music_class import MusicClass
from services.errors import BookingNotAllowed
from utils.clock import utcnow
from utils.transaction import atomic

logger = logging.getLogger(__name__)


@dataclass
class BookingRequest:
    music_class_id: int
    student_name: str
    student_email: str
    student_phone: str = ""
    notes: Optional[str] = None


def _expanded():
    return Booking.query.options(
        joinedload(Booking.music_class).joinedload(MusicClass.instructor)
    )


def confirm_booking(booking: Booking, music_class: MusicClass) -> None:
    """Attach a booking to its class and move both into the booked state."""
    booking.music_class = music_class
    booking.confirm()
    music_class.mark_booked()


def release_booking(booking: Booking) -> None:
    """Cancel a booking and reopen its class."""
    booking.cancel()
    # Reopens unconditionally, even if the class moved to Cancelled/Completed meanwhile
    booking.music_class.mark_available()


def validate_booking(class_id: int) -> bool:
    music_class = db.session.get(MusicClass, class_id)
    if music_class is None:
        return False
    if music_class.status != ClassStatus.AVAILABLE:
        return False
    if music_class.scheduled_at <= utcnow():
        return False
    return True


def create_booking(request: BookingRequest) -> Booking:
    if not validate_booking(request.music_class_id):
        logger.info("Booking rejected for class %s", request.music_class_id)
        raise BookingNotAllowed()

    booking = Booking(
        student_name=request.student_name,
        student_email=request.student_email,
        student_phone=request.student_phone,
        notes=request.notes,
    )
    # A concurrent booking of the same class fails here on uq_booking_class_confirmed
    with atomic() as session:
        music_class = session.get(MusicClass, request.music_class_id)
        confirm_booking(booking, music_class)
        session.add(booking)

    logger.info("Booking %s created for class %s", booking.id, request.music_class_id)
    return booking


def cancel_booking(booking_id: int) -> None:
    with atomic() as session:
        booking = session.get(Booking, booking_id)
        if booking is None:
            return
        if booking.status == BookingStatus.CANCELLED:
            # the class may already hold a newer confirmed booking
            return
        release_booking(booking)

    logger.info("Booking %s cancelled", booking_id)


def get_bookings_by_instructor(instructor_id: int):
    return (
        _expanded()
        .join(Booking.music_class)
        .filter(MusicClass.instructor_id == instructor_id)
        .order_by(Booking.booked_at.desc())
        .all()
    )


def get_all_bookings(limit: Optional[int] = None):
    q = _expanded().order_by(Booking.booked_at.desc())
    if limit:
        q = q.limit(limit)
    return q.all()


def has_confirmed_booking(class_id: int) -> bool:
    return (
        Booking.query
        .filter(Booking.music_class_id == class_id, Booking.status == BookingStatus.CONFIRMED)
        .first()
        is not None
    )


def get_booking_by_id(booking_id: int) -> Optional[Booking]:
    return _expanded().filter(Booking.id == booking_id).first()
