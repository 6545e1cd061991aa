"""MultiCategoryRequest — selection normalization at the API boundary."""

import pytest
from pydantic import ValidationError

from structuresync.schemas.multi_category import MultiCategoryRequest


def test_prefixes_stripped_and_order_kept():
    req = MultiCategoryRequest(categories=["Category:Person", "category: Employee", "Company"])
    assert req.categories == ["Person", "Employee", "Company"]


def test_blank_entries_dropped():
    req = MultiCategoryRequest(categories=["  ", "Category:", "Person"])
    assert req.categories == ["Person"]


def test_empty_selection_allowed_through():
    assert MultiCategoryRequest().categories == []
    assert MultiCategoryRequest().alphabetical is False


def test_selection_size_capped():
    with pytest.raises(ValidationError):
        MultiCategoryRequest(categories=[f"C{i}" for i in range(101)])
