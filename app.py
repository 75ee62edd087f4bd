from flask import Flask
from config import Config
from routes import health_bp, view_mode_bp, instructor_bp, class_bp, booking_bp, audit_bp

from models import db
from models.enums import parse_enum
from flask_migrate import Migrate
from services.view_mode import ViewMode, ViewModeState


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(view_mode_bp)
    app.register_blueprint(instructor_bp)
    app.register_blueprint(class_bp)
    app.register_blueprint(booking_bp)
    app.register_blueprint(audit_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    # One view-mode holder per app; the UI subscribes to it for re-render triggers
    app.extensions["view_mode"] = ViewModeState(
        parse_enum(ViewMode, app.config.get("DEFAULT_VIEW_MODE") or ViewMode.PUBLIC.name)
    )

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp


    register_cli(app)


    return app

#-------------------------
import click

def register_cli(app):
    @app.cli.command("init-db")
    @click.option("--drop", is_flag=True, help="Drop existing tables first.")
    def init_db(drop):
        """Create all tables (local use; deployments run `flask db upgrade`)."""
        if drop:
            db.drop_all()
        db.create_all()
        click.echo("Database tables created")

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
