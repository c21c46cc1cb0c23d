# ajax_reload_element/models.py
from __future__ import annotations

import re
from typing import List, Optional

from .extensions import db


# -------------------------
# Themes, layouts, pages
# -------------------------
class Theme(db.Model):
    __tablename__ = "themes"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    # template group folder searched before the default templates, e.g. "themes/dark"
    templates = db.Column(db.String(255))
    # e.g. "1x, 2x"
    default_image_densities = db.Column(db.String(64))

    layouts = db.relationship("Layout", backref="theme", lazy="dynamic")
    modules = db.relationship("Module", backref="theme", lazy="dynamic")

    def __repr__(self):
        return f"<Theme {self.id} {self.name}>"


class Layout(db.Model):
    __tablename__ = "layouts"

    id = db.Column(db.Integer, primary_key=True)
    pid = db.Column(db.Integer, db.ForeignKey("themes.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(128), nullable=False)
    template = db.Column(db.String(64))                            # page template, empty -> default
    doctype = db.Column(db.String(32), nullable=False, default="html5")
    module_ids = db.Column(db.JSON, nullable=False, default=list)  # modules rendered above the articles

    pages = db.relationship("Page", backref="layout", lazy="dynamic")

    @property
    def modules(self) -> List["Module"]:
        ids = [int(i) for i in (self.module_ids or [])]
        if not ids:
            return []
        found = {m.id: m for m in Module.query.filter(Module.id.in_(ids)).all()}
        return [found[i] for i in ids if i in found]

    def __repr__(self):
        return f"<Layout {self.id} {self.name}>"


class Page(db.Model):
    __tablename__ = "pages"

    id = db.Column(db.Integer, primary_key=True)
    alias = db.Column(db.String(128), unique=True, nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    layout_id = db.Column(db.Integer, db.ForeignKey("layouts.id"), nullable=False, index=True)
    published = db.Column(db.Boolean, nullable=False, default=True)
    sorting = db.Column(db.Integer, nullable=False, default=0)

    articles = db.relationship(
        "Article",
        backref="page",
        lazy="dynamic",
        order_by="Article.sorting",
    )

    def __repr__(self):
        return f"<Page {self.alias}>"


# -------------------------
# Page elements
# -------------------------
class ReloadFlagsMixin:
    """Flags an element record carries for isolated re-rendering."""

    allow_ajax_reload = db.Column(db.Boolean, nullable=False, default=False)
    ajax_reload_form_submit = db.Column(db.Boolean, nullable=False, default=False)


class Module(ReloadFlagsMixin, db.Model):
    __tablename__ = "modules"

    id = db.Column(db.Integer, primary_key=True)
    pid = db.Column(db.Integer, db.ForeignKey("themes.id", ondelete="CASCADE"), nullable=False, index=True)
    name = db.Column(db.String(128), nullable=False)
    type = db.Column(db.String(32), nullable=False, default="html")
    headline = db.Column(db.String(255))
    html = db.Column(db.Text)
    per_page = db.Column(db.Integer, nullable=False, default=0)
    css_id = db.Column(db.String(64))
    css_class = db.Column(db.String(128))

    def __repr__(self):
        return f"<Module {self.id} {self.type}>"


class Article(ReloadFlagsMixin, db.Model):
    __tablename__ = "articles"

    id = db.Column(db.Integer, primary_key=True)
    pid = db.Column(db.Integer, db.ForeignKey("pages.id", ondelete="CASCADE"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    alias = db.Column(db.String(128), index=True)
    teaser = db.Column(db.Text)
    sorting = db.Column(db.Integer, nullable=False, default=0)
    published = db.Column(db.Boolean, nullable=False, default=True)
    per_page = db.Column(db.Integer, nullable=False, default=0)  # content elements per page, 0 = all
    css_id = db.Column(db.String(64))
    css_class = db.Column(db.String(128))

    def __repr__(self):
        return f"<Article {self.id} {self.alias or self.title}>"


class Content(ReloadFlagsMixin, db.Model):
    __tablename__ = "content"

    id = db.Column(db.Integer, primary_key=True)
    # parent record id inside `ptable` (articles, news, calendar_events)
    pid = db.Column(db.Integer, nullable=False, index=True)
    ptable = db.Column(db.String(64), nullable=False, default="articles")
    type = db.Column(db.String(32), nullable=False, default="text")
    headline = db.Column(db.String(255))
    text = db.Column(db.Text)
    html = db.Column(db.Text)
    image_src = db.Column(db.String(255))
    image_width = db.Column(db.Integer)
    items = db.Column(db.JSON, nullable=False, default=list)
    per_page = db.Column(db.Integer, nullable=False, default=0)
    sorting = db.Column(db.Integer, nullable=False, default=0)
    invisible = db.Column(db.Boolean, nullable=False, default=False)
    css_id = db.Column(db.String(64))
    css_class = db.Column(db.String(128))

    def __repr__(self):
        return f"<Content {self.id} {self.type} ({self.ptable}.{self.pid})>"


# -------------------------
# Record ids from request input
# -------------------------
MAX_RECORD_ID = 2**63 - 1    # largest value an INTEGER primary key can hold
_RECORD_ID = re.compile(r"[0-9]+")


def parse_record_id(value: Optional[str]) -> Optional[int]:
    """Primary key from untrusted input, or None unless it is plain ASCII digits in range."""
    if value is None or not _RECORD_ID.fullmatch(str(value)):
        return None
    record_id = int(value)
    if record_id > MAX_RECORD_ID:
        return None
    return record_id
