"""
Tests for the sorting module.
"""

import pytest
from sqlalchemy import Column, Integer
from sqlalchemy.orm import declarative_base

from blogapi.api.sorting import SortDirection, SortDirective, SortField, parse_sort

Base = declarative_base()


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    rank = Column(Integer)


class TestSortDirection:
    def test_values(self):
        assert SortDirection.ASC == "asc"
        assert SortDirection.DESC == "desc"


class TestSortDirective:
    def test_defaults_to_ascending(self):
        assert SortDirective("name").direction == SortDirection.ASC

    def test_to_dict(self):
        directive = SortDirective("name", SortDirection.DESC)
        assert directive.to_dict() == {"field": "name", "direction": "desc"}

    def test_string_representation(self):
        assert str(SortDirective("name", SortDirection.DESC)) == "name:desc"

    def test_order_by(self):
        asc_clause = SortDirective("rank").order_by(Item.rank)
        desc_clause = SortDirective("rank", SortDirection.DESC).order_by(Item.rank)
        assert str(asc_clause) == "items.rank ASC"
        assert str(desc_clause) == "items.rank DESC"


class TestSortField:
    def test_attribute_defaults_to_name(self):
        assert SortField("title", "Title").attribute == "title"
        assert SortField("date", "Date", column="created_at").attribute == "created_at"

    def test_to_dict(self):
        assert SortField("title", "Sort by title").to_dict() == {
            "name": "title",
            "description": "Sort by title",
        }


class TestParseSort:
    def test_single_pair(self):
        assert parse_sort("created_at:desc") == [
            SortDirective("created_at", SortDirection.DESC)
        ]

    def test_direction_is_case_insensitive(self):
        assert parse_sort("title:ASC") == [SortDirective("title", SortDirection.ASC)]

    def test_comma_separated_pairs_keep_order(self):
        assert [str(d) for d in parse_sort("title:asc, created_at:desc")] == [
            "title:asc",
            "created_at:desc",
        ]

    def test_repeated_values(self):
        assert [str(d) for d in parse_sort(["title:asc", "id:desc"])] == [
            "title:asc",
            "id:desc",
        ]

    @pytest.mark.parametrize(
        "raw",
        ["created_at", "created_at:up", "a:b:c", ":asc", "", ",,"],
    )
    def test_malformed_pairs_are_dropped(self, raw):
        assert parse_sort(raw) == []

    def test_none(self):
        assert parse_sort(None) == []

    def test_bad_pairs_do_not_affect_good_ones(self):
        assert [str(d) for d in parse_sort("title,created_at:desc,x:sideways")] == [
            "created_at:desc"
        ]
