"""Shared test fixtures for the MakerBench test suite."""

import pytest

from tests.helpers import FakeGitHubClient


@pytest.fixture
def existing_tools():
    """A directory document with ids 1, 2 and 5."""
    return [
        {
            "id": 1,
            "title": "Vite",
            "url": "https://vitejs.dev",
            "description": "Next generation frontend tooling",
            "tag": ["build", "javascript"],
            "logo": "tool-1.svg",
        },
        {
            "id": 2,
            "title": "Playwright",
            "url": "https://playwright.dev",
            "description": "Reliable end-to-end testing",
            "tag": ["testing"],
            "repo": "https://github.com/microsoft/playwright",
        },
        {
            "id": 5,
            "title": "Lightning CSS",
            "url": "https://lightningcss.dev",
            "description": "An extremely fast CSS parser, transformer, and minifier",
            "tag": ["css"],
        },
    ]


@pytest.fixture
def fake_github(existing_tools):
    return FakeGitHubClient(existing_tools)


@pytest.fixture
def scratch_dir(tmp_path):
    d = tmp_path / "scratch"
    d.mkdir()
    return d
