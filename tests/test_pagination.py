"""
Unit tests for sort parsing and page arithmetic.
"""

import pytest

from taskboard.core.exceptions import ValidationError
from taskboard.services.pagination import page_count, parse_sort
from taskboard.services.task_service import SORT_COLUMNS


def test_descending_prefix():
    clauses = parse_sort("-createdAt", SORT_COLUMNS)
    assert [str(c) for c in clauses] == ["tasks.created_at DESC"]


def test_multiple_keys_keep_their_order():
    clauses = parse_sort("status, -dueDate", SORT_COLUMNS)
    assert [str(c) for c in clauses] == ["tasks.status ASC", "tasks.due_date DESC"]


def test_unknown_key_is_rejected():
    with pytest.raises(ValidationError) as exc:
        parse_sort("-password", SORT_COLUMNS)
    assert exc.value.status_code == 400
    assert exc.value.code == "INVALID_SORT"


def test_empty_expression_is_rejected():
    with pytest.raises(ValidationError):
        parse_sort(" , ", SORT_COLUMNS)


@pytest.mark.parametrize(
    "total, limit, expected",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (21, 10, 3), (5, 0, 0)],
)
def test_page_count(total, limit, expected):
    assert page_count(total, limit) == expected
