"""Shared fixtures: a mocked GitLab holding the `widget` / `cd-widget` pair."""

from __future__ import annotations

import pytest

from deploy_info.core.config import Config
from deploy_info.gitlab.http import MockHttpClient
from deploy_info.test._gitlab import BASE_URL, BROWSE_URL, WIDGET_CHART, GitLabUrls


@pytest.fixture
def urls() -> GitLabUrls:
    return GitLabUrls()


@pytest.fixture
def config() -> Config:
    return Config(token="glpat-test-0001", base_url=BASE_URL, browse_url=BROWSE_URL)


@pytest.fixture
def widget_http(urls: GitLabUrls) -> MockHttpClient:
    """GitLab where `widget` (101) has two undeployed commits on master."""
    http = MockHttpClient()
    http.set_json(urls.projects("cd-widget"), [{"id": 202, "name": "cd-widget"}])
    http.set_json(
        urls.projects("widget"),
        [
            {"id": 101, "name": "widget"},
            {"id": 202, "name": "cd-widget"},
            {"id": 303, "name": "widget-ui"},
        ],
    )
    http.set_body(urls.raw_file(202, "widget%2FChart.yaml", "production"), WIDGET_CHART)
    http.set_json(
        urls.tags(101, "widget_v4.0.1"),
        [
            {
                "name": "widget_v4.0.1",
                "message": "",
                "target": "abc123def4567890",
                "commit": {"id": "abc123def4567890", "short_id": "abc123d", "title": "Release"},
            }
        ],
    )
    http.set_json(
        urls.compare(101, "abc123d", "master"),
        {
            "commit": {"id": "2222222222", "short_id": "2222222", "title": "chore: bump deps"},
            "commits": [
                {"id": "1111111111", "short_id": "1111111", "title": "ABC-42: fix login bug"},
                {"id": "2222222222", "short_id": "2222222", "title": "chore: bump deps"},
            ],
            "diffs": [],
            "compare_timeout": False,
            "compare_same_ref": False,
        },
    )
    return http
