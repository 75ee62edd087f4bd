from sqlalchemy import text

from models.db import db
from models.enums import BookingStatus
from utils.clock import utcnow


class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)

    music_class_id = db.Column(
        db.Integer,
        db.ForeignKey("music_classes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    student_name = db.Column(db.String(120), nullable=False)
    student_email = db.Column(db.String(255), nullable=False)
    student_phone = db.Column(db.String(30), nullable=False, default="")
    notes = db.Column(db.Text, nullable=True)

    booked_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    status = db.Column(
        db.Enum(BookingStatus, native_enum=False, length=20),
        nullable=False,
        default=BookingStatus.CONFIRMED,
    )

    music_class = db.relationship("MusicClass", back_populates="bookings")

    __table_args__ = (
        # Only one confirmed booking per class; cancelled rows are kept as history
        db.Index(
            "uq_booking_class_confirmed",
            "music_class_id",
            unique=True,
            sqlite_where=text("status = 'CONFIRMED'"),
            postgresql_where=text("status = 'CONFIRMED'"),
        ),
    )

    def confirm(self):
        self.status = BookingStatus.CONFIRMED
        self.booked_at = utcnow()

    def cancel(self):
        self.status = BookingStatus.CANCELLED
