import enum


class SkillLevel(enum.Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ClassStatus(enum.Enum):
    AVAILABLE = "Available"
    BOOKED = "Booked"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class BookingStatus(enum.Enum):
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"


def parse_enum(enum_cls, raw):
    """
    Accept either the member name ("BEGINNER") or its label ("Beginner").
    Raises ValueError for anything else.
    """
    if isinstance(raw, enum_cls):
        return raw
    text = (raw or "").strip() if isinstance(raw, str) else ""
    if text.upper() in enum_cls.__members__:
        return enum_cls[text.upper()]
    for member in enum_cls:
        if member.value == text:
            return member
    raise ValueError(f"Invalid {enum_cls.__name__}: {raw!r}")
