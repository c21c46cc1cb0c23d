# -*- coding: utf-8 -*-
import click
from flask.cli import AppGroup

from .extensions import db
from .models import Article, Content, Layout, Module, Page, Theme


seed = AppGroup("seed", help="Data seeding commands.")


def seed_demo_site():
    """
    Create a small site: one theme and layout, a home page with two articles,
    and reload-enabled navigation, article list and search modules.
    Returns the created home page.
    """
    theme = Theme(name="Demo", default_image_densities="1x, 2x")
    db.session.add(theme)
    db.session.flush()

    navigation = Module(pid=theme.id, name="Navigation", type="navigation", allow_ajax_reload=True)
    listing = Module(
        pid=theme.id, name="Latest articles", type="article_list", headline="Latest",
        per_page=1, allow_ajax_reload=True,
    )
    search = Module(
        pid=theme.id, name="Search", type="search", headline="Search",
        allow_ajax_reload=True, ajax_reload_form_submit=True,
    )
    db.session.add_all([navigation, listing, search])
    db.session.flush()

    layout = Layout(
        pid=theme.id, name="Default", doctype="html5",
        module_ids=[navigation.id, listing.id, search.id],
    )
    db.session.add(layout)
    db.session.flush()

    home = Page(alias="index", title="Home", layout_id=layout.id, sorting=1)
    about = Page(alias="about", title="About", layout_id=layout.id, sorting=2)
    db.session.add_all([home, about])
    db.session.flush()

    welcome = Article(pid=home.id, title="Welcome", alias="welcome", teaser="<p>Hello.</p>", sorting=1)
    news = Article(pid=home.id, title="News", alias="news", sorting=2, per_page=1, allow_ajax_reload=True)
    db.session.add_all([welcome, news])
    db.session.flush()

    db.session.add_all([
        Content(pid=welcome.id, ptable="articles", type="text", headline="Intro",
                text="<p>Generated on {{date}} for {{page::title}}.</p>", sorting=1),
        Content(pid=welcome.id, ptable="articles", type="list", headline="Steps",
                items=["Install", "Seed", "Run", "Reload"], per_page=2, sorting=2,
                allow_ajax_reload=True),
        Content(pid=news.id, ptable="articles", type="text", headline="First", text="<p>One.</p>", sorting=1),
        Content(pid=news.id, ptable="articles", type="text", headline="Second", text="<p>Two.</p>", sorting=2),
    ])
    db.session.commit()
    return home


@seed.command("demo")
def seed_demo():
    """Create demo theme, layout, pages, articles and modules."""
    if Page.query.first() is not None:
        click.echo("Pages already exist. Skipping demo seed.")
        return
    home = seed_demo_site()
    click.echo(f"Demo site created. Home page: /{home.alias}")
