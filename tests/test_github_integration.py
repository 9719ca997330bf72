"""
Pytest tests for the GitHub REST client and metadata fetcher.
"""

import pytest
import requests
from conftest import REPO_DATA, FakeResponse, FakeSession, b64

from repo_review.config.llm_config import GitHubConfig
from repo_review.core.errors import (
    AccessDenied,
    InvalidCredential,
    RepositoryNotFound,
    UpstreamFailure,
)
from repo_review.integrations.github_integration import (
    GitHubAPIError,
    GitHubClient,
    decode_content,
    fetch_basic_info,
)


CONFIG = GitHubConfig(api_url="https://api.github.test", timeout=5)


def make_client(routes=None, exc=None, token=None):
    session = FakeSession(routes, exc)
    return GitHubClient(token=token, config=CONFIG, session=session), session


def test_token_header_only_when_given():
    _, anonymous = make_client()
    _, authed = make_client(token="ghp_abc")

    assert "Authorization" not in anonymous.headers
    assert authed.headers["Authorization"] == "token ghp_abc"


def test_fetch_basic_info_projection():
    """
    Metadata fields are copied verbatim into the basicInfo shape.
    """
    client, session = make_client({"https://api.github.test/repos/o/r": FakeResponse(200, REPO_DATA)})

    info = fetch_basic_info(client, "o", "r")

    assert info == {
        "name": "hello-world",
        "description": "My first repository",
        "stars": 42,
        "forks": 7,
        "openIssues": 1,
        "language": "Python",
        "isPrivate": False,
    }
    assert session.requested == [("https://api.github.test/repos/o/r", 5)]


@pytest.mark.parametrize(
    "status, error",
    [(404, RepositoryNotFound), (401, InvalidCredential), (403, AccessDenied), (502, UpstreamFailure)],
)
def test_fetch_basic_info_error_mapping(status, error):
    client, _ = make_client({"https://api.github.test/repos/o/r": FakeResponse(status, {"message": "nope"})})

    with pytest.raises(error) as exc:
        fetch_basic_info(client, "o", "r")
    assert exc.value.detail == "nope", "Expected the upstream message to be carried"


def test_network_error_is_upstream_failure():
    client, _ = make_client(exc=requests.ConnectionError("connection refused"))

    with pytest.raises(UpstreamFailure):
        fetch_basic_info(client, "o", "r")


def test_non_json_error_body():
    client, _ = make_client({"https://api.github.test/repos/o/r": FakeResponse(500, ValueError("html"))})

    with pytest.raises(GitHubAPIError) as exc:
        client.get_repository("o", "r")
    assert exc.value.status == 500


def test_get_contents_wraps_single_object():
    item = {"type": "file", "name": "a.py", "path": "a.py"}
    client, _ = make_client({"https://api.github.test/repos/o/r/contents/a.py": FakeResponse(200, item)})

    assert client.get_contents("o", "r", "a.py") == [item]


def test_get_file_content_decodes_base64():
    payload = {"type": "file", "path": "a.py", "encoding": "base64", "content": b64("print('é')\n")}
    client, _ = make_client({"https://api.github.test/repos/o/r/contents/a.py": FakeResponse(200, payload)})

    assert client.get_file_content("o", "r", "a.py") == "print('é')\n"


def test_decode_content_edge_cases():
    assert decode_content({"content": "", "encoding": "base64"}) is None
    assert decode_content({"content": "abc", "encoding": "none"}) is None
    assert decode_content({"content": "aGVsbG8=\n", "encoding": "base64"}) == "hello"


def test_non_json_success_body_is_api_error():
    """
    A 200 whose body is not JSON surfaces as GitHubAPIError, not ValueError.
    """
    client, _ = make_client({"https://api.github.test/repos/o/r/contents/": FakeResponse(200, ValueError("<html>"))})

    with pytest.raises(GitHubAPIError) as exc:
        client.get_contents("o", "r")
    assert exc.value.status == 200


def test_invalid_base64_decodes_to_none():
    assert decode_content({"path": "bad.py", "content": "a", "encoding": "base64"}) is None
