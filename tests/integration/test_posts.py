"""
End-to-end tests for the post endpoints.

Each test runs the full application against a fresh SQLite file.
"""

import pytest
from fastapi.testclient import TestClient

from blogapi.config import TestingSettings
from blogapi.factory import create_app
from blogapi.repositories.posts import PostRepository
from tests.helpers import create_post, login, register


def slugs_of(body):
    return [p["slug"] for p in body["data"]]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class TestCreate:
    def test_requires_authentication(self, client):
        resp = create_post(client, {}, "Hello")
        assert resp.status_code == 401
        assert resp.json()["errors"][0]["code"] == "UNAUTHORIZED"

    def test_invalid_token(self, client):
        resp = create_post(client, {"Authorization": "Bearer nope"}, "Hello")
        assert resp.status_code == 401
        assert resp.json()["errors"][0]["code"] == "INVALID_TOKEN"

    def test_generates_slug(self, client, user_headers):
        resp = create_post(client, user_headers, "Hello, World!", content="Body")
        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["slug"] == "hello-world"
        assert data["title"] == "Hello, World!"
        assert data["content"] == "Body"
        assert data["version"] == 1
        assert data["author_id"] > 0

    def test_duplicate_titles_get_suffixes(self, client, user_headers):
        created = [
            create_post(client, user_headers, "Same Title").json()["data"]["slug"]
            for _ in range(3)
        ]
        assert created == ["same-title", "same-title-1", "same-title-2"]

    def test_hyphens_in_title_are_dropped(self, client, user_headers):
        resp = create_post(client, user_headers, "E-mail tips")
        assert resp.json()["data"]["slug"] == "email-tips"

    def test_title_without_slug_characters(self, client, user_headers):
        assert create_post(client, user_headers, "!!!").json()["data"]["slug"] == "post"
        assert create_post(client, user_headers, "???").json()["data"]["slug"] == "post-1"

    def test_custom_slug(self, client, user_headers):
        resp = create_post(client, user_headers, "Anything", slug="my-custom-slug")
        assert resp.json()["data"]["slug"] == "my-custom-slug"

    def test_invalid_custom_slug(self, client, user_headers):
        resp = create_post(client, user_headers, "Anything", slug="Not A Slug")
        assert resp.status_code == 400
        error = resp.json()["errors"][0]
        assert error["code"] == "INVALID_SLUG"
        assert error["field"] == "slug"

    def test_taken_custom_slug(self, client, user_headers):
        create_post(client, user_headers, "First", slug="taken")
        resp = create_post(client, user_headers, "Second", slug="taken")
        assert resp.status_code == 409
        assert resp.json()["errors"][0]["code"] == "SLUG_TAKEN"

    def test_body_validation(self, client, user_headers):
        resp = client.post("/api/posts", json={"content": "x"}, headers=user_headers)
        assert resp.status_code == 422
        assert resp.json()["errors"][0]["field"] == "title"

    def test_retries_when_slug_is_taken_concurrently(self, client, user_headers, monkeypatch):
        create_post(client, user_headers, "Race")
        original = PostRepository.slug_exists
        calls = {"count": 0}

        # The first check misses the existing row, as if it had been
        # written between the check and the insert
        async def flaky(self, slug, exclude_id=None):
            calls["count"] += 1
            if calls["count"] == 1:
                return False
            return await original(self, slug, exclude_id=exclude_id)

        monkeypatch.setattr(PostRepository, "slug_exists", flaky)
        resp = create_post(client, user_headers, "Race")
        assert resp.status_code == 201
        assert resp.json()["data"]["slug"] == "race-1"

    def test_gives_up_after_repeated_conflicts(self, client, user_headers, monkeypatch):
        create_post(client, user_headers, "Race")

        async def never_taken(self, slug, exclude_id=None):
            return False

        monkeypatch.setattr(PostRepository, "slug_exists", never_taken)
        resp = create_post(client, user_headers, "Race")
        assert resp.status_code == 409
        assert resp.json()["errors"][0]["code"] == "SLUG_CONFLICT"


class TestRead:
    def test_get_is_public(self, client, user_headers):
        create_post(client, user_headers, "Public Post")
        resp = client.get("/api/posts/public-post")
        assert resp.status_code == 200
        assert resp.json()["data"]["title"] == "Public Post"

    def test_missing(self, client):
        resp = client.get("/api/posts/nothing-here")
        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert body["errors"][0]["code"] == "NOT_FOUND"
        assert body["message"] == "Post 'nothing-here' not found"


class TestUpdate:
    def test_title_change_reslugs(self, client, user_headers):
        create_post(client, user_headers, "Old Title")
        resp = client.put("/api/posts/old-title", json={"title": "New Title"}, headers=user_headers)
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["slug"] == "new-title"
        assert data["version"] == 2
        assert client.get("/api/posts/old-title").status_code == 404

    def test_reslug_ignores_own_row(self, client, user_headers):
        create_post(client, user_headers, "Hello World")
        resp = client.put(
            "/api/posts/hello-world", json={"title": "Hello   World"}, headers=user_headers
        )
        assert resp.json()["data"]["slug"] == "hello-world"

    def test_reslug_avoids_other_rows(self, client, user_headers):
        create_post(client, user_headers, "Taken")
        create_post(client, user_headers, "Other")
        resp = client.put("/api/posts/other", json={"title": "Taken"}, headers=user_headers)
        assert resp.json()["data"]["slug"] == "taken-1"

    def test_explicit_slug_wins(self, client, user_headers):
        create_post(client, user_headers, "Old")
        resp = client.put(
            "/api/posts/old", json={"title": "New", "slug": "chosen"}, headers=user_headers
        )
        assert resp.json()["data"]["slug"] == "chosen"

    def test_empty_fields_are_ignored(self, client, user_headers):
        create_post(client, user_headers, "Keep", content="Original")
        resp = client.put(
            "/api/posts/keep", json={"title": "", "content": "  "}, headers=user_headers
        )
        data = resp.json()["data"]
        assert (data["title"], data["content"], data["version"]) == ("Keep", "Original", 1)

    def test_content_change_keeps_slug(self, client, user_headers):
        create_post(client, user_headers, "Stable")
        resp = client.put("/api/posts/stable", json={"content": "New body"}, headers=user_headers)
        data = resp.json()["data"]
        assert data["slug"] == "stable"
        assert data["content"] == "New body"

    def test_version_conflict(self, client, user_headers):
        create_post(client, user_headers, "Versioned")
        client.put("/api/posts/versioned", json={"content": "v2", "version": 1}, headers=user_headers)
        resp = client.put(
            "/api/posts/versioned", json={"content": "v3", "version": 1}, headers=user_headers
        )
        assert resp.status_code == 409
        assert resp.json()["errors"][0]["code"] == "VERSION_CONFLICT"

    def test_requires_authentication(self, client, user_headers):
        create_post(client, user_headers, "Locked")
        assert client.put("/api/posts/locked", json={"title": "x"}).status_code == 401

    def test_missing(self, client, user_headers):
        resp = client.put("/api/posts/missing", json={"title": "x"}, headers=user_headers)
        assert resp.status_code == 404


class TestDelete:
    def test_delete(self, client, user_headers):
        create_post(client, user_headers, "Doomed")
        resp = client.delete("/api/posts/doomed", headers=user_headers)
        assert resp.status_code == 200
        assert resp.json() == {"data": {"message": "Post deleted successfully"}}
        assert client.get("/api/posts/doomed").status_code == 404

    def test_requires_authentication(self, client):
        assert client.delete("/api/posts/anything").status_code == 401


class TestList:
    @pytest.fixture
    def posts(self, client, user_headers):
        for title in ["Banana bread", "Apple pie", "Cherry tart"]:
            assert create_post(client, user_headers, title).status_code == 201

    def test_empty(self, client):
        body = client.get("/api/posts").json()
        assert body["data"] == []
        assert body["pagination"] == {
            "current_page": 1,
            "per_page": 10,
            "total_items": 0,
            "total_pages": 0,
            "links": {
                "first": "/api/posts?page=1&limit=10",
                "last": "/api/posts?page=1&limit=10",
            },
        }

    def test_default_order_is_newest_first(self, client, posts):
        body = client.get("/api/posts").json()
        assert slugs_of(body) == ["cherry-tart", "apple-pie", "banana-bread"]

    def test_sort(self, client, posts):
        resp = client.get("/api/posts?sort=title:asc")
        assert slugs_of(resp.json()) == ["apple-pie", "banana-bread", "cherry-tart"]
        assert resp.json()["metadata"]["applied_sort"] == {"title": "asc"}

    def test_search(self, client, posts):
        resp = client.get("/api/posts?search=title:like:an")
        assert slugs_of(resp.json()) == ["banana-bread"]
        assert resp.json()["metadata"]["applied_search"] == [
            {"field": "title", "operator": "like", "value": "an"}
        ]

    def test_searches_are_combined(self, client, posts):
        resp = client.get("/api/posts?search=title:nlike:pie&search=title:nlike:tart")
        assert slugs_of(resp.json()) == ["banana-bread"]

    def test_author_and_date_filters(self, client, posts, user_headers):
        author_id = client.get("/api/posts").json()["data"][0]["author_id"]
        assert len(client.get(f"/api/posts?search=author_id:in:{author_id},999").json()["data"]) == 3
        assert client.get(f"/api/posts?search=author_id:ne:{author_id}").json()["data"] == []
        assert len(client.get("/api/posts?search=created_at:gte:2000-01-01").json()["data"]) == 3
        assert client.get("/api/posts?search=created_at:lt:2000-01-01").json()["data"] == []

    def test_malformed_directives_are_ignored(self, client, posts):
        resp = client.get("/api/posts?search=title&search=title:between:x&sort=title&sort=title:sideways")
        assert resp.status_code == 200
        assert len(resp.json()["data"]) == 3
        assert resp.json()["metadata"]["applied_search"] == []

    def test_empty_search_value_is_applied(self, client, posts):
        resp = client.get("/api/posts?search=title:eq:")
        assert resp.status_code == 200
        assert resp.json()["data"] == []
        assert resp.json()["metadata"]["applied_search"] == [
            {"field": "title", "operator": "eq", "value": ""}
        ]

    def test_unknown_search_field(self, client, posts):
        resp = client.get("/api/posts?search=content:like:x")
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["code"] == "INVALID_FILTER_FIELD"

    def test_operator_not_allowed(self, client, posts):
        resp = client.get("/api/posts?search=title:gt:a")
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["code"] == "INVALID_OPERATOR"

    def test_unknown_sort_field(self, client, posts):
        resp = client.get("/api/posts?sort=content:asc")
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["code"] == "INVALID_SORT_FIELD"

    def test_bad_filter_value(self, client, posts):
        resp = client.get("/api/posts?search=author_id:eq:abc")
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["code"] == "INVALID_FILTER_VALUE"

    def test_pagination(self, client, posts):
        body = client.get("/api/posts?sort=title:asc&page=2&limit=1").json()
        assert slugs_of(body) == ["banana-bread"]
        assert body["pagination"]["total_items"] == 3
        assert body["pagination"]["total_pages"] == 3
        assert body["pagination"]["links"] == {
            "first": "/api/posts?page=1&limit=1",
            "last": "/api/posts?page=3&limit=1",
            "prev": "/api/posts?page=1&limit=1",
            "next": "/api/posts?page=3&limit=1",
        }

    def test_bad_paging_values_fall_back(self, client, posts):
        body = client.get("/api/posts?page=0&limit=-5").json()
        assert body["pagination"]["current_page"] == 1
        assert body["pagination"]["per_page"] == 10

    def test_page_beyond_last_is_empty(self, client, posts):
        body = client.get("/api/posts?page=9").json()
        assert body["data"] == []
        assert body["pagination"]["total_items"] == 3
        assert "next" not in body["pagination"]["links"]

    def test_metadata_lists_allowed_fields(self, client, posts):
        metadata = client.get("/api/posts").json()["metadata"]
        assert [f["name"] for f in metadata["allowed_search"]] == [
            "title",
            "slug",
            "author_id",
            "created_at",
        ]
        assert metadata["allowed_search"][2]["operators"] == ["eq", "ne", "in", "nin"]
        assert [f["name"] for f in metadata["allowed_sort"]] == ["title", "created_at"]
        assert metadata["applied_sort"] == {}


def test_envelope_blocks_absent_when_flags_off(database_url):
    settings = TestingSettings(DATABASE_URL=database_url)
    with TestClient(create_app(settings)) as client:
        register(client, "bob", "bob@example.com")
        headers = login(client, "bob@example.com")
        create_post(client, headers, "Quiet")
        body = client.get("/api/posts").json()
    assert set(body) == {"data"}
    assert slugs_of(body) == ["quiet"]
