"""
Pytest configuration: a fake GitHub behind the shared HTTP session.
"""

from unittest.mock import Mock

import pytest
import requests

from clock_core import api, http_client
from clock_core.constants import API_BASE_URL


def _make_response(status_code=200, body=None, bad_json=False):
    response = Mock()
    response.status_code = status_code
    if bad_json:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1")
    else:
        response.json.return_value = body
    return response


class FakeGitHub:
    """
    Stands in for requests.Session. Routes get() by URL path to canned
    responses; unknown paths raise ConnectionError like a dead network.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, path, response):
        self.routes[path] = response

    def paths(self):
        return [call["path"] for call in self.calls]

    def get(self, url, params=None, headers=None, timeout=None):
        path = url[len(API_BASE_URL):]
        self.calls.append({"path": path, "params": params, "headers": headers, "timeout": timeout})
        response = self.routes.get(path)
        if response is None:
            raise requests.ConnectionError(f"no route to {path}")
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def github(monkeypatch):
    """Fake GitHub installed as clock_core.http_client.http."""
    fake = FakeGitHub()
    monkeypatch.setattr(http_client, "http", fake)
    api.set_base_url(None)
    return fake


@pytest.fixture
def pr_payload():
    """Builder for one /repos/{name}/pulls entry."""
    def build(author, title, updated_at, number=1, repo="acme/widgets"):
        return {
            "user": {"login": author},
            "title": title,
            "html_url": f"https://github.com/{repo}/pull/{number}",
            "updated_at": updated_at,
        }
    return build
