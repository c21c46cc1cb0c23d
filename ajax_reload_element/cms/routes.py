# ajax_reload_element/cms/routes.py
from __future__ import annotations

from typing import Optional

from flask import abort, current_app, g, render_template
from markupsafe import Markup

from ..models import Page
from . import bp, hooks
from .context import get_render_context
from .insert_tags import get_insert_tag_parser
from .renderers import get_article, get_frontend_module
from .template import get_script_tag_rewriter, restore_basic_entities


def _find_page(alias: Optional[str]) -> Optional[Page]:
    alias = alias or current_app.config.get("CMS_ROOT_ALIAS", "index")
    return Page.query.filter_by(alias=alias, published=True).first()


@bp.route("/", defaults={"alias": None}, methods=["GET", "POST"])
@bp.route("/<alias>", methods=["GET", "POST"])
def page(alias):
    page = _find_page(alias)
    if page is None:
        abort(404)
    layout = page.layout
    if layout is None:
        current_app.logger.error("Page %s has no layout", page.alias)
        abort(500)

    g.cms_page = page

    # Listeners may answer the request themselves (e.g. with a JSON fragment)
    response = hooks.trigger(hooks.GET_PAGE_LAYOUT, page, layout)
    if response is not None:
        return response

    ctx = get_render_context()
    ctx.apply_layout(layout)

    modules = [Markup(get_frontend_module(m)) for m in layout.modules]
    articles = [Markup(get_article(a)) for a in page.articles.filter_by(published=True)]

    candidates = [f"{ctx.template}.html"]
    if ctx.template_group:
        candidates.insert(0, f"{ctx.template_group.strip('/')}/{ctx.template}.html")

    html = render_template(
        candidates,
        page=page,
        modules=modules,
        articles=articles,
        output_format=ctx.output_format,
        output_variant=ctx.output_variant,
    )
    html = get_insert_tag_parser().replace(html)
    html = restore_basic_entities(html)
    rewriter = get_script_tag_rewriter()
    if rewriter is not None:
        html = rewriter(html)
    return html
