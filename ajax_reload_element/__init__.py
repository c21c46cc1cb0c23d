# ajax_reload_element/__init__.py
import logging
import os
from pathlib import Path

from flask import Flask
from sqlalchemy import inspect

from .extensions import db, migrate, csrf


def _ensure_all_tables(app):
    """Dev-only SQLite safety net: make sure base tables exist once."""
    uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if not uri.startswith("sqlite:"):
        return
    with app.app_context():
        from . import models  # noqa: F401

        insp = inspect(db.engine)
        existing = set(insp.get_table_names())
        if not existing:
            app.logger.info("Dev create_all (fresh SQLite DB)")
            db.create_all()


def create_app(test_config=None):
    app = Flask(__name__)

    # ---------- Base Config ----------
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev-only")
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv("DATABASE_URL", "sqlite:///cms.db")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config.setdefault("LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO"))
    app.config.setdefault("LANGUAGES", ["en", "de"])
    # The reload script sends the element token in this header
    app.config.setdefault("WTF_CSRF_HEADERS", ["X-CSRFToken", "X-CSRF-Token"])

    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    # Ensure instance folder exists (default SQLite database lives there)
    Path(app.instance_path).mkdir(parents=True, exist_ok=True)

    # ---------- Extensions ----------
    db.init_app(app)
    migrate.init_app(app, db)
    csrf.init_app(app)

    # ---------- Page renderer + ajax reload ----------
    from .ajax_reload import init_app as init_ajax_reload
    from .cms import init_app as init_cms

    init_cms(app)
    init_ajax_reload(app)

    # ---------- CLI ----------
    from .cli import seed

    app.cli.add_command(seed)

    _ensure_all_tables(app)
    return app
