# ajax_reload_element/cms/renderers.py
"""
Per-type renderers for modules, content elements and articles.

Each record is copied into a ``FrontendTemplate`` named after its type
(``mod_<type>``, ``ce_<type>``, ``mod_article``) and parsed, so every
rendered element passes through the ``parse_template`` hook.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from flask import current_app, g, url_for
from markupsafe import Markup

from ..models import Article, Content, Module, Page
from .context import get_render_context
from .environment import get_input
from .pagination import Pagination
from .template import FrontendTemplate, css_id_attribute


def _base_data(record, type_: str, class_prefix: str) -> Dict[str, Any]:
    return {
        "id": record.id,
        "type": type_,
        "headline": record.headline if hasattr(record, "headline") else None,
        "css_id": css_id_attribute(record.css_id),
        "css_class": " ".join(c for c in (f"{class_prefix}_{type_}", record.css_class) if c),
        "allow_ajax_reload": bool(record.allow_ajax_reload),
        "ajax_reload_form_submit": bool(record.ajax_reload_form_submit),
        "output_format": get_render_context().output_format,
    }


# -------------------------
# Modules
# -------------------------
def _module_html(module: Module, tpl: FrontendTemplate) -> None:
    tpl.html = Markup(module.html or "")


def _module_navigation(module: Module, tpl: FrontendTemplate) -> None:
    current = g.get("cms_page")
    pages = Page.query.filter_by(published=True).order_by(Page.sorting, Page.id).all()
    tpl.items = [
        {
            "title": p.title,
            "url": url_for("cms.page", alias=p.alias),
            "active": current is not None and current.id == p.id,
        }
        for p in pages
    ]


def _module_article_list(module: Module, tpl: FrontendTemplate) -> None:
    query = Article.query.filter_by(published=True).order_by(Article.sorting, Article.id)
    total = query.count()
    per_page = module.per_page or total or 1
    pagination = Pagination(total, per_page, f"page_n{module.id}")
    articles = query.offset(pagination.offset).limit(per_page).all()
    tpl.articles = [{"id": a.id, "title": a.title, "teaser": Markup(a.teaser or "")} for a in articles]
    tpl.pagination = Markup(pagination.generate())


def _module_search(module: Module, tpl: FrontendTemplate) -> None:
    keywords = (get_input().get("keywords") or get_input().post("keywords") or "").strip()
    tpl.keywords = keywords
    tpl.results = []
    if keywords:
        tpl.results = (
            Article.query.filter(Article.published.is_(True), Article.title.ilike(f"%{keywords}%"))
            .order_by(Article.sorting, Article.id)
            .all()
        )


MODULE_TYPES: Dict[str, Callable[[Module, FrontendTemplate], None]] = {
    "html": _module_html,
    "navigation": _module_navigation,
    "article_list": _module_article_list,
    "search": _module_search,
}


def get_frontend_module(module: Module) -> str:
    compile_ = MODULE_TYPES.get(module.type)
    if compile_ is None:
        current_app.logger.warning("Module %s has unknown type %r", module.id, module.type)
        return ""
    tpl = FrontendTemplate(f"mod_{module.type}", **_base_data(module, module.type, "mod"))
    compile_(module, tpl)
    return tpl.parse()


# -------------------------
# Content elements
# -------------------------
def _srcset(src: str, width: Optional[int], densities: Optional[str]) -> Optional[str]:
    if not src or not width or not densities:
        return None
    out: List[str] = []
    for density in densities.split(","):
        density = density.strip()
        if not density.endswith("x"):
            continue
        try:
            factor = float(density[:-1])
        except ValueError:
            continue
        out.append(f"{src}?w={round(width * factor)} {density}")
    return ", ".join(out) or None


def _content_text(content: Content, tpl: FrontendTemplate) -> None:
    tpl.text = Markup(content.text or "")


def _content_html(content: Content, tpl: FrontendTemplate) -> None:
    tpl.html = Markup(content.html or "")


def _content_image(content: Content, tpl: FrontendTemplate) -> None:
    tpl.src = content.image_src
    tpl.width = content.image_width
    tpl.srcset = _srcset(content.image_src, content.image_width, get_render_context().default_densities)


def _content_list(content: Content, tpl: FrontendTemplate) -> None:
    items = list(content.items or [])
    per_page = content.per_page or len(items) or 1
    pagination = Pagination(len(items), per_page, f"page_c{content.id}")
    tpl.items = items[pagination.offset:pagination.offset + per_page]
    tpl.pagination = Markup(pagination.generate())


CONTENT_TYPES: Dict[str, Callable[[Content, FrontendTemplate], None]] = {
    "text": _content_text,
    "html": _content_html,
    "image": _content_image,
    "list": _content_list,
}


def get_content_element(content: Content) -> str:
    if content.invisible:
        return ""
    compile_ = CONTENT_TYPES.get(content.type)
    if compile_ is None:
        current_app.logger.warning("Content element %s has unknown type %r", content.id, content.type)
        return ""
    tpl = FrontendTemplate(f"ce_{content.type}", **_base_data(content, content.type, "ce"))
    tpl.ptable = content.ptable
    compile_(content, tpl)
    return tpl.parse()


# -------------------------
# Articles
# -------------------------
def get_article(article: Article) -> str:
    if not article.published:
        return ""

    query = (
        Content.query.filter_by(pid=article.id, ptable="articles", invisible=False)
        .order_by(Content.sorting, Content.id)
    )
    pagination_html = ""
    if article.per_page:
        pagination = Pagination(query.count(), article.per_page, f"page_a{article.id}")
        query = query.offset(pagination.offset).limit(article.per_page)
        pagination_html = pagination.generate()

    tpl = FrontendTemplate("mod_article", **_base_data(article, "article", "mod"))
    tpl.title = article.title
    tpl.alias = article.alias
    tpl.elements = [Markup(get_content_element(c)) for c in query.all()]
    tpl.pagination = Markup(pagination_html)
    return tpl.parse()
