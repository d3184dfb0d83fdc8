"""Unit tests for paging parameters and pagination headers."""

import pytest
from starlette.datastructures import URL

from moneylogger.api.headers import entity_alert, pagination_headers
from moneylogger.core.exceptions import BadRequestError
from moneylogger.core.pagination import Page, Pageable, parse_pageable

SORTABLE = ["id", "amount", "details"]


class TestParsePageable:
    """Test page, size and sort parameter parsing."""

    def test_defaults(self):
        pageable = parse_pageable([], SORTABLE, default_size=20)

        assert pageable == Pageable(page=0, size=20, sort=())
        assert pageable.offset == 0

    def test_page_size_and_sort(self):
        pageable = parse_pageable(
            [("page", "2"), ("size", "5"), ("sort", "amount,desc"), ("sort", "details")],
            SORTABLE,
        )

        assert pageable.page == 2
        assert pageable.size == 5
        assert pageable.offset == 10
        assert pageable.sort == (("amount", True), ("details", False))

    def test_filters_are_ignored(self):
        pageable = parse_pageable([("amount.equals", "3")], SORTABLE)

        assert pageable == Pageable()

    @pytest.mark.parametrize(
        "params",
        [
            [("page", "-1")],
            [("page", "first")],
            [("size", "0")],
            [("size", "5000")],
            [("sort", "created_by,asc")],
            [("sort", "amount,sideways")],
        ],
    )
    def test_invalid_paging_is_bad_request(self, params):
        with pytest.raises(BadRequestError) as exc_info:
            parse_pageable(params, SORTABLE, max_size=2000)

        assert exc_info.value.error_code == "QRY_002"


class TestPage:
    """Test page arithmetic."""

    @pytest.mark.parametrize(
        "total,size,expected",
        [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2)],
    )
    def test_total_pages(self, total, size, expected):
        page = Page(content=[], total=total, pageable=Pageable(size=size))

        assert page.total_pages == expected


class TestPaginationHeaders:
    """Test X-Total-Count and Link headers."""

    def test_middle_page_links(self):
        url = URL("http://test/api/v1/transactions?page=1&size=10&amount.greaterThan=5")
        page = Page(content=[], total=35, pageable=Pageable(page=1, size=10))

        headers = pagination_headers(url, page)

        assert headers["X-Total-Count"] == "35"
        links = headers["Link"].split(",")
        assert [link.split("; ")[1] for link in links] == [
            'rel="next"',
            'rel="prev"',
            'rel="last"',
            'rel="first"',
        ]
        assert "page=2" in links[0]
        assert "page=0" in links[1]
        assert "page=3" in links[2]
        assert "amount.greaterThan=5" in links[0]

    def test_single_page_has_only_last_and_first(self):
        url = URL("http://test/api/v1/categories")
        page = Page(content=[], total=0, pageable=Pageable(page=0, size=20))

        headers = pagination_headers(url, page)

        assert headers["X-Total-Count"] == "0"
        assert 'rel="next"' not in headers["Link"]
        assert 'rel="prev"' not in headers["Link"]
        assert 'rel="last"' in headers["Link"]


def test_entity_alert_headers():
    headers = entity_alert("Transaction", "created", 42)

    assert headers == {
        "X-Moneylogger-Alert": "moneyloggerTransaction.created",
        "X-Moneylogger-Params": "42",
    }
