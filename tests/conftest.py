"""Shared test fixtures."""

import pytest

from registry_census.crawler.models import Entry, Page, Remote, Repository


def make_entry(
    name: str = "io.github.example/server",
    version: str = "1.0.0",
    repo_url: str | None = "https://github.com/example/server",
    remotes: list[tuple[str, str]] | None = None,
) -> Entry:
    """Build an Entry; `repo_url=None` means no repository block at all."""
    return Entry(
        name=name,
        version=version,
        repository=Repository(url=repo_url, source="github") if repo_url is not None else None,
        remotes=tuple(Remote(type=t, url=u) for t, u in (remotes or [])),
    )


class ScriptedFetcher:
    """Page fetcher that replays a fixed list of pages and records cursors."""

    def __init__(self, pages: list[Page]):
        self.pages = pages
        self.cursors: list[str | None] = []

    def __call__(self, cursor: str | None) -> Page:
        self.cursors.append(cursor)
        return self.pages[len(self.cursors) - 1]

    @property
    def calls(self) -> int:
        return len(self.cursors)


class EndlessFetcher:
    """Page fetcher that always has another page."""

    def __init__(self, per_page: int = 1):
        self.per_page = per_page
        self.calls = 0

    def __call__(self, cursor: str | None) -> Page:
        self.calls += 1
        entries = [
            make_entry(name=f"server-{self.calls}-{i}") for i in range(self.per_page)
        ]
        return Page(entries=entries, next_cursor=f"c{self.calls}")


class RecordingReporter:
    """Reporter that keeps every message per channel."""

    def __init__(self):
        self.messages: dict[str, list[str]] = {
            "info": [], "warning": [], "error": [], "success": [],
        }

    def info(self, message: str) -> None:
        self.messages["info"].append(message)

    def warning(self, message: str) -> None:
        self.messages["warning"].append(message)

    def error(self, message: str) -> None:
        self.messages["error"].append(message)

    def success(self, message: str) -> None:
        self.messages["success"].append(message)


@pytest.fixture
def three_pages():
    """Three pages of two entries, linked by cursors c1 and c2."""
    return [
        Page(entries=[make_entry(name="a"), make_entry(name="b")], next_cursor="c1"),
        Page(entries=[make_entry(name="c"), make_entry(name="d")], next_cursor="c2"),
        Page(entries=[make_entry(name="e"), make_entry(name="f")], next_cursor=None),
    ]


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def mixed_entries():
    """Two bundleable, one remote-only and one no-source entry."""
    return [
        make_entry(name="bundle-one"),
        make_entry(name="remote", repo_url=None, remotes=[("sse", "https://api.example.com")]),
        make_entry(name="bundle-two", repo_url="https://gitlab.com/x/y"),
        make_entry(name="broken", repo_url="not a url"),
    ]


@pytest.fixture
def registry_payload():
    """A list response as returned by the registry API."""
    return {
        "servers": [
            {
                "server": {
                    "$schema": "https://static.modelcontextprotocol.io/schemas/server.schema.json",
                    "name": "io.github.example/weather",
                    "description": "Weather lookups",
                    "version": "0.2.1",
                    "repository": {"url": "https://github.com/example/weather", "source": "github"},
                    "packages": [
                        {
                            "registryType": "npm",
                            "identifier": "@example/weather",
                            "transport": {"type": "stdio"},
                            "environmentVariables": [
                                {
                                    "name": "WEATHER_API_KEY",
                                    "description": "API key",
                                    "format": "string",
                                    "isSecret": True,
                                    "isRequired": True,
                                }
                            ],
                        }
                    ],
                },
                "_meta": {
                    "io.modelcontextprotocol.registry/official": {
                        "status": "active",
                        "publishedAt": "2025-09-01T10:00:00Z",
                        "updatedAt": "2025-09-02T10:00:00Z",
                        "isLatest": True,
                    }
                },
            },
            {
                "server": {
                    "name": "com.example/hosted",
                    "description": "Hosted only",
                    "version": "1.0.0",
                    "remotes": [{"type": "streamable-http", "url": "https://mcp.example.com"}],
                },
                "_meta": {},
            },
        ],
        "metadata": {"nextCursor": "com.example/hosted:1.0.0", "count": 2},
    }
