"""Booking ledger: validation, creation, cancellation and listings."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from models import db
from models.booking import Booking
from models.enums import BookingStatus, ClassStatus
from models.music_class import MusicClass
from services import booking_service
from services.booking_service import BookingRequest
from services.errors import BookingNotAllowed
from tests.conftest import make_booking, make_class, make_instructor
from utils.clock import utcnow


def _request(class_id, name="Test Student", email="test@student.com"):
    return BookingRequest(
        music_class_id=class_id,
        student_name=name,
        student_email=email,
        student_phone="+1-555-1111",
        notes="Test notes",
    )


class TestValidateBooking:

    def test_available_future_class_is_valid(self, app):
        c = make_class(make_instructor())
        assert booking_service.validate_booking(c.id) is True

    def test_missing_class_is_invalid(self, app):
        assert booking_service.validate_booking(999) is False

    @pytest.mark.parametrize(
        "status", [ClassStatus.BOOKED, ClassStatus.CANCELLED, ClassStatus.COMPLETED]
    )
    def test_non_available_status_is_invalid(self, app, status):
        c = make_class(make_instructor(), status=status)
        assert booking_service.validate_booking(c.id) is False

    def test_past_class_is_invalid(self, app):
        c = make_class(make_instructor(), scheduled_at=utcnow() - timedelta(hours=1))
        assert booking_service.validate_booking(c.id) is False

    def test_validation_has_no_side_effects(self, app):
        c = make_class(make_instructor())
        booking_service.validate_booking(c.id)
        assert Booking.query.count() == 0
        assert db.session.get(MusicClass, c.id).status == ClassStatus.AVAILABLE


class TestCreateBooking:

    def test_creates_confirmed_booking_and_books_class(self, app):
        c = make_class(make_instructor())
        start = utcnow()
        booking = booking_service.create_booking(_request(c.id, name="Ada", email="ada@x.com"))
        end = utcnow()

        assert booking.id is not None
        assert booking.status == BookingStatus.CONFIRMED
        assert start <= booking.booked_at <= end
        assert booking.student_name == "Ada"
        assert booking.student_email == "ada@x.com"
        assert booking.student_phone == "+1-555-1111"
        assert booking.notes == "Test notes"
        assert Booking.query.count() == 1
        assert db.session.get(MusicClass, c.id).status == ClassStatus.BOOKED

    def test_class_exposes_its_confirmed_booking(self, app):
        c = make_class(make_instructor())
        booking = booking_service.create_booking(_request(c.id))
        assert db.session.get(MusicClass, c.id).booking.id == booking.id

    def test_missing_class_raises_and_writes_nothing(self, app):
        with pytest.raises(BookingNotAllowed):
            booking_service.create_booking(_request(999))
        assert Booking.query.count() == 0

    @pytest.mark.parametrize(
        "status", [ClassStatus.BOOKED, ClassStatus.CANCELLED, ClassStatus.COMPLETED]
    )
    def test_unavailable_class_raises(self, app, status):
        c = make_class(make_instructor(), status=status)
        with pytest.raises(BookingNotAllowed):
            booking_service.create_booking(_request(c.id))
        assert Booking.query.count() == 0
        assert db.session.get(MusicClass, c.id).status == status

    def test_past_class_raises(self, app):
        c = make_class(make_instructor(), scheduled_at=utcnow() - timedelta(hours=1))
        with pytest.raises(BookingNotAllowed, match="not available for booking"):
            booking_service.create_booking(_request(c.id))
        assert Booking.query.count() == 0

    def test_second_booking_for_same_class_is_rejected(self, app):
        c = make_class(make_instructor())
        booking_service.create_booking(_request(c.id))
        with pytest.raises(BookingNotAllowed):
            booking_service.create_booking(_request(c.id, name="Late Student"))
        assert Booking.query.count() == 1

    def test_racing_write_is_rejected_by_store(self, app):
        # a confirmed booking already holds the slot but the class still reads Available
        c = make_class(make_instructor())
        make_booking(c)

        with pytest.raises(IntegrityError):
            booking_service.create_booking(_request(c.id))

        assert Booking.query.count() == 1
        assert db.session.get(MusicClass, c.id).status == ClassStatus.AVAILABLE

    def test_class_can_be_booked_again_after_cancellation(self, app):
        c = make_class(make_instructor())
        first = booking_service.create_booking(_request(c.id))
        booking_service.cancel_booking(first.id)

        second = booking_service.create_booking(_request(c.id, name="Second"))

        assert second.id != first.id
        assert db.session.get(MusicClass, c.id).status == ClassStatus.BOOKED
        assert db.session.get(MusicClass, c.id).booking.id == second.id


class TestCancelBooking:

    def test_cancels_booking_and_reopens_class(self, app):
        c = make_class(make_instructor())
        booking = booking_service.create_booking(_request(c.id))

        booking_service.cancel_booking(booking.id)

        assert db.session.get(Booking, booking.id).status == BookingStatus.CANCELLED
        assert db.session.get(MusicClass, c.id).status == ClassStatus.AVAILABLE
        assert db.session.get(MusicClass, c.id).booking is None

    def test_unknown_booking_is_a_silent_no_op(self, app):
        c = make_class(make_instructor(), status=ClassStatus.BOOKED)
        booking_service.cancel_booking(12345)
        assert db.session.get(MusicClass, c.id).status == ClassStatus.BOOKED

    def test_cancelling_an_old_booking_again_leaves_newer_booking_alone(self, app):
        c = make_class(make_instructor())
        first = booking_service.create_booking(_request(c.id))
        booking_service.cancel_booking(first.id)
        second = booking_service.create_booking(_request(c.id, name="Second"))

        booking_service.cancel_booking(first.id)

        stored = db.session.get(MusicClass, c.id)
        assert stored.status == ClassStatus.BOOKED
        assert stored.booking.id == second.id
        assert db.session.get(Booking, second.id).status == BookingStatus.CONFIRMED

    def test_reopens_class_regardless_of_its_status(self, app):
        c = make_class(make_instructor(), status=ClassStatus.COMPLETED)
        booking = make_booking(c)

        booking_service.cancel_booking(booking.id)

        assert db.session.get(MusicClass, c.id).status == ClassStatus.AVAILABLE


class TestBookingQueries:

    def test_bookings_by_instructor_filters_and_orders_newest_first(self, app):
        alice = make_instructor("Alice")
        bob = make_instructor("Bob")
        now = utcnow()
        older = make_booking(make_class(alice), booked_at=now - timedelta(days=2))
        newer = make_booking(make_class(alice), booked_at=now - timedelta(hours=1))
        make_booking(make_class(bob), booked_at=now)

        rows = booking_service.get_bookings_by_instructor(alice.id)

        assert [b.id for b in rows] == [newer.id, older.id]
        assert all(b.music_class.instructor.name == "Alice" for b in rows)

    def test_bookings_by_instructor_empty(self, app):
        alice = make_instructor("Alice")
        assert booking_service.get_bookings_by_instructor(alice.id) == []

    def test_all_bookings_ordered_newest_first(self, app):
        instructor = make_instructor()
        now = utcnow()
        a = make_booking(make_class(instructor), booked_at=now - timedelta(days=3))
        b = make_booking(make_class(instructor), booked_at=now)
        c = make_booking(make_class(instructor), booked_at=now - timedelta(days=1))

        rows = booking_service.get_all_bookings()

        assert [r.id for r in rows] == [b.id, c.id, a.id]
        assert rows[0].music_class is not None
        assert rows[0].music_class.instructor is not None

    def test_all_bookings_respects_limit(self, app):
        instructor = make_instructor()
        for _ in range(3):
            make_booking(make_class(instructor))
        assert len(booking_service.get_all_bookings(limit=2)) == 2

    def test_has_confirmed_booking(self, app):
        c = make_class(make_instructor())
        assert booking_service.has_confirmed_booking(c.id) is False
        make_booking(c, status=BookingStatus.CANCELLED)
        assert booking_service.has_confirmed_booking(c.id) is False
        make_booking(c)
        assert booking_service.has_confirmed_booking(c.id) is True

    def test_get_booking_by_id(self, app):
        instructor = make_instructor("Carol")
        booking = make_booking(make_class(instructor))

        found = booking_service.get_booking_by_id(booking.id)

        assert found.id == booking.id
        assert found.music_class.instructor.name == "Carol"
        assert booking_service.get_booking_by_id(999) is None
