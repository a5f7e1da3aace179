"""
Tests for response envelope assembly.
"""

from types import SimpleNamespace

from blogapi.api.envelope import build_envelope, list_envelope
from blogapi.api.pagination import Page, paginate
from blogapi.api.query import ListParams
from blogapi.services.posts import POST_QUERY


def fake_request(show_metadata, show_pagination, path="/api/posts"):
    settings = SimpleNamespace(SHOW_METADATA=show_metadata, SHOW_PAGINATION=show_pagination)
    return SimpleNamespace(
        app=SimpleNamespace(state=SimpleNamespace(settings=settings)),
        url=SimpleNamespace(path=path),
    )


def make_params(**kwargs):
    values = {"search": None, "sort": None, "page": None, "limit": None}
    values.update(kwargs)
    return ListParams(**values)


class TestBuildEnvelope:
    def test_data_only(self):
        assert build_envelope([1, 2], {"a": 1}, {"b": 2}) == {"data": [1, 2]}

    def test_flags_add_blocks(self):
        envelope = build_envelope(
            [], {"a": 1}, {"b": 2}, show_metadata=True, show_pagination=True
        )
        assert envelope == {"data": [], "metadata": {"a": 1}, "pagination": {"b": 2}}

    def test_metadata_without_content_is_empty_object(self):
        assert build_envelope([], show_metadata=True) == {"data": [], "metadata": {}}

    def test_pagination_without_content_is_empty_object(self):
        assert build_envelope([], show_pagination=True) == {"data": [], "pagination": {}}


class TestListEnvelope:
    def make_page(self):
        return Page(items=["a"], total=1, page=1, limit=10, window=paginate(1, 1, 10))

    def test_flags_off(self):
        envelope = list_envelope(fake_request(False, False), self.make_page(), POST_QUERY, make_params())
        assert envelope == {"data": ["a"]}

    def test_flags_on(self):
        params = make_params(search=["title:like:go"], sort="title:asc")
        envelope = list_envelope(fake_request(True, True), self.make_page(), POST_QUERY, params)

        assert envelope["data"] == ["a"]
        assert envelope["metadata"]["applied_search"] == [
            {"field": "title", "operator": "like", "value": "go"}
        ]
        assert envelope["metadata"]["applied_sort"] == {"title": "asc"}
        assert [f["name"] for f in envelope["metadata"]["allowed_search"]] == [
            "title",
            "slug",
            "author_id",
            "created_at",
        ]
        assert envelope["pagination"]["links"]["first"] == "/api/posts?page=1&limit=10"
        assert envelope["pagination"]["total_pages"] == 1

    def test_only_pagination(self):
        envelope = list_envelope(fake_request(False, True), self.make_page(), POST_QUERY, make_params())
        assert set(envelope) == {"data", "pagination"}
