from .db import db
from .enums import SkillLevel, ClassStatus, BookingStatus
from .instructor import Instructor
from .music_class import MusicClass
from .booking import Booking
from .audit_log import AuditLog
