import asyncio
import base64

import httpx
import pytest
from fastapi import HTTPException

from app.main import app
from app.services.github_service import GitHubService, get_github_service

REPOS = [
    {"id": 2, "name": "newest", "html_url": "https://github.com/octocat/newest"},
    {"id": 1, "name": "older", "html_url": "https://github.com/octocat/older"},
]


@pytest.fixture
def github_upstream():
    """
    以 httpx.MockTransport 取代 GitHub；handler 可在測試中替換
    """
    state = {"handler": lambda request: httpx.Response(200, json=REPOS), "requests": []}

    def dispatch(request):
        state["requests"].append(request)
        return state["handler"](request)

    service = GitHubService(
        client_id="client-id",
        client_secret="client-secret",
        transport=httpx.MockTransport(dispatch),
    )
    app.dependency_overrides[get_github_service] = lambda: service
    yield state
    app.dependency_overrides.pop(get_github_service, None)


def test_repos_are_returned_verbatim(client, github_upstream):
    response = client.get("/api/profile/github/octocat")

    assert response.status_code == 200
    assert response.json() == REPOS


def test_upstream_request_shape(client, github_upstream):
    client.get("/api/profile/github/octocat")

    request = github_upstream["requests"][0]
    assert request.url.path == "/users/octocat/repos"
    assert request.url.params["per_page"] == "5"
    assert request.url.params["sort"] == "created"
    assert request.url.params["direction"] == "desc"
    assert "client_secret" not in str(request.url)
    expected = base64.b64encode(b"client-id:client-secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.headers["User-Agent"]


def test_upstream_404_returns_not_found(client, github_upstream):
    github_upstream["handler"] = lambda request: httpx.Response(404, json={"message": "Not Found"})

    response = client.get("/api/profile/github/nobody")

    assert response.status_code == 404
    assert response.json() == {"msg": "No Github profile found"}


def test_upstream_error_status_returns_not_found(client, github_upstream):
    github_upstream["handler"] = lambda request: httpx.Response(500)

    response = client.get("/api/profile/github/octocat")

    assert response.status_code == 404


def test_transport_error_still_responds(client, github_upstream):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    github_upstream["handler"] = refuse

    response = client.get("/api/profile/github/octocat")

    assert response.status_code == 502
    assert response.json() == {"msg": "GitHub service unavailable"}


def test_timeout_still_responds(client, github_upstream):
    def hang(request):
        raise httpx.ReadTimeout("timed out", request=request)

    github_upstream["handler"] = hang

    response = client.get("/api/profile/github/octocat")

    assert response.status_code == 502


def test_invalid_json_returns_502(client, github_upstream):
    github_upstream["handler"] = lambda request: httpx.Response(200, content=b"<html>")

    response = client.get("/api/profile/github/octocat")

    assert response.status_code == 502


def test_anonymous_calls_send_no_auth():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    service = GitHubService(repo_limit=3, transport=httpx.MockTransport(handler))
    result = asyncio.run(service.get_recent_repos("octocat"))

    assert result == []
    assert "Authorization" not in seen[0].headers
    assert seen[0].url.params["per_page"] == "3"


def test_service_raises_http_exception_on_missing_user():
    service = GitHubService(transport=httpx.MockTransport(lambda request: httpx.Response(404)))

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(service.get_recent_repos("ghost"))

    assert exc_info.value.status_code == 404


def test_username_is_escaped_in_upstream_path(client, github_upstream):
    response = client.get("/api/profile/github/octocat%3Fx=1%23")

    assert response.status_code == 200
    request = github_upstream["requests"][0]
    upstream_path = request.url.raw_path.split(b"?")[0]
    assert upstream_path.startswith(b"/users/octocat%3F")
    assert upstream_path.endswith(b"/repos")
    assert "x" not in request.url.params


def test_username_with_slash_stays_in_one_segment():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(404)

    service = GitHubService(transport=httpx.MockTransport(handler))
    with pytest.raises(HTTPException):
        asyncio.run(service.get_recent_repos("octocat/../orgs"))

    assert seen[0].url.raw_path.split(b"?")[0] == b"/users/octocat%2F..%2Forgs/repos"
