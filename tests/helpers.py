"""
Request helpers shared by the integration tests.
"""

PASSWORD = "Secret123!"


def register(client, username, email, password=PASSWORD, role_id=None):
    body = {"username": username, "email": email, "password": password}
    if role_id is not None:
        body["role_id"] = role_id
    return client.post("/api/register", json=body)


def login(client, email, password=PASSWORD):
    resp = client.post("/api/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def role_id(client, headers, name):
    resp = client.get(f"/api/roles?search=name:eq:{name}", headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()["data"][0]["id"]


def create_post(client, headers, title, content="Some content", slug=None):
    body = {"title": title, "content": content}
    if slug is not None:
        body["slug"] = slug
    return client.post("/api/posts", json=body, headers=headers)
