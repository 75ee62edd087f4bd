from models.db import db
from models.enums import SkillLevel, ClassStatus, BookingStatus


class MusicClass(db.Model):
    __tablename__ = "music_classes"

    id = db.Column(db.Integer, primary_key=True)

    instructor_id = db.Column(
        db.Integer,
        db.ForeignKey("instructors.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    instrument = db.Column(db.String(80), nullable=False, index=True)
    level = db.Column(db.Enum(SkillLevel, native_enum=False, length=20), nullable=False, default=SkillLevel.BEGINNER)

    # naive UTC, same as every other timestamp in the schema
    scheduled_at = db.Column(db.DateTime, nullable=False, index=True)
    duration_minutes = db.Column(db.Integer, nullable=False, default=60)

    price = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    description = db.Column(db.Text, nullable=False, default="")

    status = db.Column(
        db.Enum(ClassStatus, native_enum=False, length=20),
        nullable=False,
        default=ClassStatus.AVAILABLE,
        index=True,
    )

    instructor = db.relationship("Instructor", back_populates="classes")
    bookings = db.relationship(
        "Booking",
        back_populates="music_class",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Booking.booked_at.desc()",
    )

    @property
    def booking(self):
        """The confirmed booking holding this slot, if any."""
        for b in self.bookings:
            if b.status == BookingStatus.CONFIRMED:
                return b
        return None

    def mark_booked(self):
        self.status = ClassStatus.BOOKED

    def mark_available(self):
        self.status = ClassStatus.AVAILABLE

    def mark_cancelled(self):
        self.status = ClassStatus.CANCELLED

    def mark_completed(self):
        self.status = ClassStatus.COMPLETED
