"""Shared test fixtures and helpers."""

from datetime import timedelta
from decimal import Decimal
from typing import Optional

import pytest

from app import create_app
from config import TestConfig
from models import db
from models.booking import Booking
from models.enums import BookingStatus, ClassStatus, SkillLevel
from models.instructor import Instructor
from models.music_class import MusicClass
from utils.clock import utcnow


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def view_state(app):
    return app.extensions["view_mode"]


def make_instructor(name: str = "Test Instructor", is_active: bool = True, **kwargs) -> Instructor:
    """Persist an Instructor with sensible defaults."""
    instructor = Instructor(
        name=name,
        email=f"{name.replace(' ', '.').lower()}@test.com",
        phone=kwargs.pop("phone", "+1-555-0000"),
        bio=kwargs.pop("bio", "Test bio"),
        specialization=kwargs.pop("specialization", "Piano"),
        hourly_rate=kwargs.pop("hourly_rate", Decimal("50.00")),
        is_active=is_active,
        **kwargs,
    )
    db.session.add(instructor)
    db.session.commit()
    return instructor


def make_class(
    instructor: Instructor,
    status: ClassStatus = ClassStatus.AVAILABLE,
    scheduled_at=None,
    instrument: str = "Piano",
    level: SkillLevel = SkillLevel.BEGINNER,
) -> MusicClass:
    """Persist a MusicClass; defaults to an Available slot a week out."""
    music_class = MusicClass(
        instructor_id=instructor.id,
        instrument=instrument,
        level=level,
        scheduled_at=scheduled_at or utcnow() + timedelta(days=7),
        duration_minutes=60,
        price=Decimal("50.00"),
        description="Test class description",
        status=status,
    )
    db.session.add(music_class)
    db.session.commit()
    return music_class


def make_booking(
    music_class: MusicClass,
    status: BookingStatus = BookingStatus.CONFIRMED,
    student_name: str = "Test Student",
    booked_at: Optional[object] = None,
) -> Booking:
    """Persist a Booking row directly, bypassing the ledger."""
    booking = Booking(
        music_class_id=music_class.id,
        student_name=student_name,
        student_email="test@student.com",
        student_phone="+1-555-1111",
        notes="Test notes",
        booked_at=booked_at or utcnow(),
        status=status,
    )
    db.session.add(booking)
    db.session.commit()
    return booking
