# ajax_reload_element/cms/__init__.py
from __future__ import annotations

from flask import Blueprint, g

bp = Blueprint("cms", __name__)

# -----------------------------------------------------------------------------
# Default config (can be overridden in app.config)
# -----------------------------------------------------------------------------
DEFAULTS = {
    "CMS_DEFAULT_PAGE_TEMPLATE": "fe_page",
    "CMS_DOCTYPE_SEPARATOR": "_",
    "CMS_AJAX_HEADER_VALUES": ("XMLHttpRequest", "fetch"),
    "CMS_DYNAMIC_SCRIPT_TAGS": True,
    "CMS_DATE_FORMAT": "%Y-%m-%d",
    "CMS_ROOT_ALIAS": "index",
}

# Request-scoped values kept in flask.g by the page pipeline
REQUEST_STATE = ("cms_request", "cms_input", "cms_render_context", "cms_page", "cms_body")


def init_app(app):
    """
    Wire the page renderer into the app. Register the blueprint after every
    other blueprint: its ``/<alias>`` route catches all remaining paths.
    """
    from .insert_tags import create_parser
    from . import routes  # noqa: F401  (registers the page routes on bp)

    for key, value in DEFAULTS.items():
        app.config.setdefault(key, value)

    app.extensions["cms_insert_tags"] = create_parser()
    app.extensions.setdefault("cms_hooks", {})

    @app.before_request
    def _reset_request_state():
        for key in REQUEST_STATE:
            g.pop(key, None)

    app.register_blueprint(bp)
