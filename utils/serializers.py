def _money(value):
    return str(value) if value is not None else None


def _iso(value):
    return value.isoformat() if value else None


def instructor_to_dict(i, include_classes=False):
    out = {
        "id": i.id,
        "name": i.name,
        "email": i.email,
        "phone": i.phone,
        "bio": i.bio,
        "specialization": i.specialization,
        "instruments": i.instruments,
        "hourly_rate": _money(i.hourly_rate),
        "image_url": i.image_url,
        "is_active": i.is_active,
    }
    if include_classes:
        out["classes"] = [class_to_dict(c, include_instructor=False) for c in i.classes]
    return out


def booking_to_dict(b, include_class=True):
    out = {
        "id": b.id,
        "music_class_id": b.music_class_id,
        "student_name": b.student_name,
        "student_email": b.student_email,
        "student_phone": b.student_phone,
        "notes": b.notes,
        "booked_at": _iso(b.booked_at),
        "status": b.status.name,
    }
    if include_class:
        out["music_class"] = class_to_dict(b.music_class) if b.music_class else None
    return out


def class_to_dict(c, include_instructor=True, include_booking=False):
    out = {
        "id": c.id,
        "instructor_id": c.instructor_id,
        "instrument": c.instrument,
        "level": c.level.name,
        "scheduled_at": _iso(c.scheduled_at),
        "duration_minutes": c.duration_minutes,
        "price": _money(c.price),
        "description": c.description,
        "status": c.status.name,
    }
    if include_instructor:
        out["instructor"] = (
            {"id": c.instructor.id, "name": c.instructor.name} if c.instructor else None
        )
    if include_booking:
        booking = c.booking
        out["booking"] = booking_to_dict(booking, include_class=False) if booking else None
    return out
