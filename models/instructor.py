from models.db import db


class Instructor(db.Model):
    __tablename__ = "instructors"

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(120), nullable=False, index=True)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(30), nullable=False, default="")
    bio = db.Column(db.Text, nullable=False, default="")
    specialization = db.Column(db.String(255), nullable=False, default="")  # e.g. "Piano, Music Theory"
    hourly_rate = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    image_url = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # passive_deletes="all": the FK (ON DELETE RESTRICT) decides, the ORM never nulls children
    classes = db.relationship(
        "MusicClass",
        back_populates="instructor",
        passive_deletes="all",
        order_by="MusicClass.scheduled_at",
    )

    @property
    def instruments(self):
        return [part.strip() for part in (self.specialization or "").split(",") if part.strip()]
