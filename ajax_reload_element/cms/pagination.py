# ajax_reload_element/cms/pagination.py
from __future__ import annotations

import math
from typing import List, Optional

from flask import abort, render_template

from .environment import get_input, get_request, set_query_parameter


def _parse_page(value: Optional[str]) -> int:
    try:
        return int(value) if value is not None else 1
    except (TypeError, ValueError):
        abort(404)


class Pagination:
    """
    Page window over ``total`` items, driven by the ``param`` request parameter
    (``page_n12``, ``page_c7``, ...).
    """

    def __init__(self, total: int, per_page: int, param: str):
        self.total = total
        self.per_page = per_page
        self.param = param
        self.pages = max(math.ceil(total / per_page), 1) if per_page > 0 else 1

        page = _parse_page(get_input().get(param))
        if page < 1 or page > self.pages:
            abort(404)
        self.page = page

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    def url(self, page: int) -> str:
        return "/" + set_query_parameter(get_request(), self.param, page)

    def links(self) -> List[dict]:
        return [
            {"page": n, "url": self.url(n), "current": n == self.page}
            for n in range(1, self.pages + 1)
        ]

    def generate(self) -> str:
        if self.pages < 2:
            return ""
        return render_template("pagination.html", pagination=self)
