"""Turn the registry listing into a bundleability report."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from ..crawler.models import Entry
from ..crawler.paginator import PageFetcher, fetch_all
from ..reporting import NullReporter, Reporter
from .classifier import Category, classify

# Keys used for each category in the JSON report
JSON_KEYS = {
    Category.BUNDLEABLE: "bundleable",
    Category.REMOTE_ONLY: "remoteOnly",
    Category.NO_SOURCE: "noSource",
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_percentage(count: int, total: int) -> str:
    """Share of `total` as a one-decimal percentage string, "0.0%" when total is 0."""
    if total == 0:
        return "0.0%"
    return f"{count / total * 100:.1f}%"


@dataclass(frozen=True)
class AnalysisResult:
    """Bundleability breakdown of the registry at one point in time."""
    timestamp: str
    total_servers: int
    bundleable: tuple[str, ...] = ()
    remote_only: tuple[str, ...] = ()
    no_source: tuple[str, ...] = ()
    truncated: bool = False

    def servers(self, category: Category) -> tuple[str, ...]:
        """`name@version` identifiers in a category, in registry order."""
        return {
            Category.BUNDLEABLE: self.bundleable,
            Category.REMOTE_ONLY: self.remote_only,
            Category.NO_SOURCE: self.no_source,
        }[category]

    def count(self, category: Category) -> int:
        return len(self.servers(category))

    def percentage(self, category: Category) -> str:
        return format_percentage(self.count(category), self.total_servers)

    @property
    def unbundleable(self) -> int:
        return self.count(Category.REMOTE_ONLY) + self.count(Category.NO_SOURCE)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON report structure."""
        return {
            "timestamp": self.timestamp,
            "totalServers": self.total_servers,
            "truncated": self.truncated,
            "categories": {key: self.count(c) for c, key in JSON_KEYS.items()},
            "percentages": {key: self.percentage(c) for c, key in JSON_KEYS.items()},
            "servers": {key: list(self.servers(c)) for c, key in JSON_KEYS.items()},
        }


def summarize(
    entries: Iterable[Entry],
    truncated: bool = False,
    timestamp: datetime | None = None,
) -> AnalysisResult:
    """Classify entries and bucket their identifiers by category."""
    buckets: dict[Category, list[str]] = {category: [] for category in Category}

    total = 0
    for entry in entries:
        buckets[classify(entry).category].append(entry.key)
        total += 1

    return AnalysisResult(
        timestamp=(timestamp or _utc_now()).isoformat(),
        total_servers=total,
        bundleable=tuple(buckets[Category.BUNDLEABLE]),
        remote_only=tuple(buckets[Category.REMOTE_ONLY]),
        no_source=tuple(buckets[Category.NO_SOURCE]),
        truncated=truncated,
    )


def analyze(
    page_fetcher: PageFetcher,
    limit: int | None = None,
    reporter: Reporter | None = None,
    clock: Callable[[], datetime] = _utc_now,
) -> AnalysisResult:
    """Fetch the whole registry through `page_fetcher` and classify it.

    Failures while fetching propagate; no partial report is built.
    """
    reporter = reporter or NullReporter()

    fetched = fetch_all(page_fetcher, limit=limit, reporter=reporter)
    reporter.info(f"Analyzing {len(fetched.entries)} servers...")

    return summarize(fetched.entries, truncated=fetched.truncated, timestamp=clock())
