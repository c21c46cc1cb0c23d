from types import SimpleNamespace

import pytest

from ajax_reload_element import create_app
from ajax_reload_element.extensions import db
from ajax_reload_element.models import Article, Content, Layout, Module, Page, Theme


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "WTF_CSRF_ENABLED": False,
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def site(app):
    """A theme, a layout with three modules and a page with three articles."""
    with app.app_context():
        theme = Theme(name="Test", default_image_densities="1x, 2x")
        db.session.add(theme)
        db.session.flush()

        nav = Module(pid=theme.id, name="Nav", type="navigation", allow_ajax_reload=True)
        listing = Module(pid=theme.id, name="List", type="article_list", per_page=1, allow_ajax_reload=True)
        custom = Module(
            pid=theme.id, name="Custom", type="html", allow_ajax_reload=True, ajax_reload_form_submit=True,
            html="<p class=\"token\">{{request_token}}</p><p class=\"literal\">[{]literal[}]</p>",
        )
        locked = Module(pid=theme.id, name="Locked", type="html", html="<p>locked</p>")
        db.session.add_all([nav, listing, custom, locked])
        db.session.flush()

        layout = Layout(pid=theme.id, name="Default", doctype="html5", module_ids=[nav.id, listing.id, custom.id])
        db.session.add(layout)
        db.session.flush()

        page = Page(alias="index", title="Home", layout_id=layout.id)
        db.session.add(page)
        db.session.flush()

        alpha = Article(pid=page.id, title="Alpha", sorting=1, allow_ajax_reload=True)
        beta = Article(pid=page.id, title="Beta", sorting=2)
        gamma = Article(pid=page.id, title="Gamma", sorting=3)
        db.session.add_all([alpha, beta, gamma])
        db.session.flush()

        text = Content(pid=alpha.id, ptable="articles", type="text", headline="Hello",
                       text="<p>Text body</p>", allow_ajax_reload=True, sorting=1)
        image = Content(pid=alpha.id, ptable="articles", type="image", image_src="/img/a.jpg",
                        image_width=100, allow_ajax_reload=True, sorting=2)
        steps = Content(pid=beta.id, ptable="articles", type="list", items=["one", "two", "three"],
                        per_page=2, allow_ajax_reload=True, sorting=1)
        hidden = Content(pid=beta.id, ptable="articles", type="text", text="<p>hidden</p>", sorting=2)
        db.session.add_all([text, image, steps, hidden])
        db.session.commit()

        return SimpleNamespace(
            theme=theme.id, layout=layout.id, page=page.id,
            nav=nav.id, listing=listing.id, custom=custom.id, locked=locked.id,
            alpha=alpha.id, beta=beta.id, gamma=gamma.id,
            text=text.id, image=image.id, steps=steps.id, hidden=hidden.id,
        )
