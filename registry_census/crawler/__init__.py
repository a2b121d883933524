"""Registry crawler module."""

from .models import Entry, Package, Page, Remote, Repository
from .paginator import MAX_PAGES, FetchResult, fetch_all
from .registry_client import RegistryClient

__all__ = [
    "Entry",
    "Package",
    "Page",
    "Remote",
    "Repository",
    "MAX_PAGES",
    "FetchResult",
    "fetch_all",
    "RegistryClient",
]
