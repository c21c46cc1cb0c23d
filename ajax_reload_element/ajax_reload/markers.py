# ajax_reload_element/ajax_reload/markers.py
from __future__ import annotations

from flask import current_app, g
from flask_wtf.csrf import generate_csrf
from markupsafe import escape

from ..cms.template import FrontendTemplate, add_to_body
from .elements import ReloadableElement, classify_template


def on_parse_template(template) -> None:
    """
    Tag a reload-enabled element with its identifier and a request token, and
    put the reload script into the page body once per request.
    """
    if not isinstance(template, FrontendTemplate) or not template.allow_ajax_reload:
        return

    kind = classify_template(template, current_app.config["AJAX_RELOAD_CONTENT_TABLES"])

    # css_id is printed in the opening tag of every element template
    token = generate_csrf()
    template.css_id = (template.css_id or "") + ' data-ajax-reload-element="%s"%s data-ajax-reload-token="%s"' % (
        ReloadableElement(kind, int(template.id)),
        ' data-ajax-reload-form-submit=""' if template.ajax_reload_form_submit else "",
        escape(token),
    )

    if not g.get("ajax_reload_js_injected"):
        g.ajax_reload_js_injected = True
        add_to_body(FrontendTemplate(current_app.config["AJAX_RELOAD_SCRIPT_TEMPLATE"]).parse())
