# ajax_reload_element/ajax_reload/__init__.py
"""
Ajax reload of single page elements.

Two listeners on the page pipeline:

- ``markers.on_parse_template`` tags reload-enabled modules, content elements
  and articles with ``data-ajax-reload-*`` attributes and adds the reload
  script to the page body.
- ``responder.on_get_page_layout`` answers ajax requests carrying
  ``ajax_reload_element=<kind>::<id>`` with the element's HTML as JSON.
"""
from __future__ import annotations

from flask import g

from ..cms import hooks

# -----------------------------------------------------------------------------
# Default config (can be overridden in app.config)
# -----------------------------------------------------------------------------
DEFAULTS = {
    # ptable values that mark a template as a content element
    "AJAX_RELOAD_CONTENT_TABLES": ("articles", "news", "calendar_events"),
    "AJAX_RELOAD_SCRIPT_TEMPLATE": "j_ajax_reload_pagination",
    "AJAX_RELOAD_DEFAULT_LANGUAGE": "en",
}


def init_app(app):
    from .elements import ELEMENT_KINDS, validate_kinds
    from .markers import on_parse_template
    from .responder import on_get_page_layout

    for key, value in DEFAULTS.items():
        app.config.setdefault(key, value)

    validate_kinds(ELEMENT_KINDS)

    hooks.register(app, hooks.PARSE_TEMPLATE, on_parse_template)
    hooks.register(app, hooks.GET_PAGE_LAYOUT, on_get_page_layout)

    @app.before_request
    def _reset_script_flag():
        g.pop("ajax_reload_js_injected", None)

    app.logger.debug("Ajax reload listeners registered")
