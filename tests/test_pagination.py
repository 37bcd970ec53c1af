"""Pagination clamping and sort parsing."""

import math

import pytest

from spec_manager.errors.exceptions import ValidationError
from spec_manager.models.common import MAX_PAGE, PageParams
from spec_manager.services.specification_service import parse_sort, parse_status


@pytest.mark.parametrize(
    "page,limit,expected",
    [(1, 10, (1, 10)), (0, 10, (1, 10)), (-5, 0, (1, 1)), (3, 500, (3, 100)), (2, 100, (2, 100)),
     (10**20, 10, (MAX_PAGE, 10))],
)
def test_clamp(page, limit, expected):
    params = PageParams.clamp(page, limit)
    assert (params.page, params.limit) == expected


@pytest.mark.parametrize("limit", [1, 3, 10, 100])
@pytest.mark.parametrize("total", [0, 1, 9, 10, 11, 250])
def test_total_pages_is_ceiling(limit, total):
    pagination = PageParams.clamp(1, limit).paginate(total)
    assert pagination.total_pages == math.ceil(total / limit)


def test_offset():
    assert PageParams.clamp(3, 20).offset == 40
    assert PageParams.clamp(10**20, 100).offset < 2**63


@pytest.mark.parametrize(
    "sort,expected",
    [
        (None, ("updatedAt", True)),
        ("title", ("title", False)),
        ("-createdAt", ("createdAt", True)),
        ("version", ("version", False)),
        ("-passwordHash", ("updatedAt", True)),
        ("bogus", ("updatedAt", False)),
    ],
)
def test_parse_sort(sort, expected):
    assert parse_sort(sort) == expected


def test_parse_status():
    assert parse_status(None) is None
    assert parse_status("REVIEW") == "REVIEW"
    with pytest.raises(ValidationError):
        parse_status("draft")
