"""Bundleability classification of registry entries.

Categories:
- bundleable: has a valid repository URL, can potentially be built from source
- remote-only: has remote endpoints but no source repository
- no-source: missing or invalid repository URL

The checks run in that order of precedence: remote-only first, then
no-source. An entry with remotes and no repository is remote-only.
"""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import SplitResult, urlsplit

from ..crawler.models import Entry

# Characters a URL host can never contain
FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r#/:<>?@[\\]^|\x7f")

# Schemes whose URLs must name a host
HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


class Category(str, Enum):
    """Bundleability categories."""

    BUNDLEABLE = "bundleable"
    REMOTE_ONLY = "remote-only"
    NO_SOURCE = "no-source"


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one entry."""
    can_bundle: bool
    category: Category
    reason: str | None = None


def classify(entry: Entry) -> Classification:
    """Assign exactly one category to an entry."""
    if is_remote_only(entry):
        return Classification(
            can_bundle=False,
            category=Category.REMOTE_ONLY,
            reason="Remote-only server with no source repository",
        )

    if not has_valid_repository(entry):
        return Classification(
            can_bundle=False,
            category=Category.NO_SOURCE,
            reason="No valid repository URL available",
        )

    return Classification(can_bundle=True, category=Category.BUNDLEABLE)


def is_remote_only(entry: Entry) -> bool:
    """Entry has remotes but no repository URL at all."""
    return bool(entry.remotes) and _is_blank(_repository_url(entry))


def has_valid_repository(entry: Entry) -> bool:
    """Entry has a non-empty, syntactically valid repository URL."""
    url = _repository_url(entry)
    if _is_blank(url):
        return False
    return is_valid_url(url)


def is_valid_url(value: str) -> bool:
    """Check that `value` parses as an absolute URL.

    Purely syntactic: a scheme plus either a host or a path, and a host free
    of characters no URL host may contain. Nothing is fetched.
    """
    value = value.strip()
    try:
        parts = urlsplit(value)
        parts.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        return False

    if not parts.scheme:
        return False

    if parts.netloc:
        if not _is_valid_host(parts):
            return False
    elif parts.scheme.lower() in HOST_REQUIRED_SCHEMES:
        return False

    return bool(parts.netloc or parts.path)


def _is_valid_host(parts: SplitResult) -> bool:
    host_port = parts.netloc.rpartition("@")[2]
    if host_port.startswith("["):
        # IPv6 literal, bracket syntax already checked by urlsplit
        return True

    host = host_port.rpartition(":")[0] if ":" in host_port else host_port
    if not host:
        return parts.scheme.lower() not in HOST_REQUIRED_SCHEMES
    return not any(c in FORBIDDEN_HOST_CHARS or ord(c) < 0x20 for c in host)


def _repository_url(entry: Entry) -> str | None:
    if entry.repository is None:
        return None
    return entry.repository.url


def _is_blank(url: str | None) -> bool:
    return url is None or url.strip() == ""
