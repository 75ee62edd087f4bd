import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to the code as musiclessons.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "musiclessons.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Lesson defaults
    DEFAULT_CLASS_DURATION_MINUTES = int(os.getenv("DEFAULT_CLASS_DURATION_MINUTES", "60"))

    # View mode the UI starts in: PUBLIC, ADMIN or INSTRUCTOR
    DEFAULT_VIEW_MODE = os.getenv("DEFAULT_VIEW_MODE", "PUBLIC").strip().upper()

    # Cap for list endpoints (bookings, audit logs)
    BOOKINGS_LIST_LIMIT = int(os.getenv("BOOKINGS_LIST_LIMIT", "200"))

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    DEFAULT_VIEW_MODE = "PUBLIC"
