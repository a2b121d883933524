"""HTTP client for the MCP registry list endpoint."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from ..errors import MalformedResponse, TransportFailure
from .models import (
    Entry,
    EnvironmentVariable,
    Package,
    Page,
    RegistryMeta,
    Remote,
    Repository,
)

logger = logging.getLogger(__name__)

MCP_REGISTRY_URL = "https://registry.modelcontextprotocol.io/v0.1/servers"
MAX_PAGE_SIZE = 100
DEFAULT_TIMEOUT = 30.0
OFFICIAL_META_KEY = "io.modelcontextprotocol.registry/official"


class RepositoryPayload(BaseModel):
    """Repository block of a server record."""
    url: str | None = None
    source: str | None = None


class RemotePayload(BaseModel):
    """Remote endpoint block of a server record."""
    type: str | None = None
    url: str | None = None


class TransportPayload(BaseModel):
    type: str | None = None


class EnvironmentVariablePayload(BaseModel):
    name: str | None = None
    description: str | None = None
    format: str | None = None
    is_secret: bool | None = Field(None, alias="isSecret")
    is_required: bool | None = Field(None, alias="isRequired")


class PackagePayload(BaseModel):
    """Package block of a server record."""
    registry_type: str | None = Field(None, alias="registryType")
    identifier: str | None = None
    transport: TransportPayload | None = None
    environment_variables: list[EnvironmentVariablePayload] | None = Field(
        None, alias="environmentVariables"
    )


class ServerPayload(BaseModel):
    """The `server` object of a registry record.

    Only `name` and `version` are required. Everything else is informational
    and may be null or missing without rejecting the page.
    """
    name: str
    version: str
    description: str | None = None
    repository: RepositoryPayload | None = None
    packages: list[PackagePayload] | None = None
    remotes: list[RemotePayload] | None = None


class OfficialMetaPayload(BaseModel):
    status: str | None = None
    published_at: str | None = Field(None, alias="publishedAt")
    updated_at: str | None = Field(None, alias="updatedAt")
    is_latest: bool | None = Field(None, alias="isLatest")


class ServerRecord(BaseModel):
    """One element of the `servers` list."""
    server: ServerPayload
    meta: dict[str, Any] | None = Field(None, alias="_meta")

    def to_entry(self) -> Entry:
        """Convert the wire record into an immutable Entry."""
        server = self.server

        repository = None
        if server.repository is not None and server.repository.url is not None:
            repository = Repository(
                url=server.repository.url,
                source=server.repository.source or "",
            )

        packages = tuple(
            Package(
                registry_type=p.registry_type or "",
                identifier=p.identifier or "",
                transport_type=(p.transport.type or "") if p.transport else "",
                environment_variables=tuple(
                    EnvironmentVariable(
                        name=v.name or "",
                        description=v.description or "",
                        format=v.format or "",
                        is_secret=bool(v.is_secret),
                        is_required=v.is_required,
                    )
                    for v in (p.environment_variables or [])
                ),
            )
            for p in (server.packages or [])
        )

        return Entry(
            name=server.name,
            version=server.version,
            description=server.description or "",
            repository=repository,
            remotes=tuple(
                Remote(type=r.type or "", url=r.url or "") for r in (server.remotes or [])
            ),
            packages=packages,
            meta=self._registry_meta(),
        )

    def _registry_meta(self) -> RegistryMeta:
        """Official metadata, or defaults when the block is absent or unreadable."""
        official = (self.meta or {}).get(OFFICIAL_META_KEY)
        if not isinstance(official, dict):
            return RegistryMeta()

        try:
            parsed = OfficialMetaPayload.model_validate(official)
        except ValidationError:
            logger.debug("Ignoring unreadable registry metadata for %s", self.server.name)
            return RegistryMeta()

        return RegistryMeta(
            status=parsed.status or "",
            published_at=parsed.published_at,
            updated_at=parsed.updated_at,
            is_latest=bool(parsed.is_latest),
        )


class PageMetadata(BaseModel):
    next_cursor: str | None = Field(None, alias="nextCursor")
    count: int | None = None


class RegistryPage(BaseModel):
    """Body of a list response."""
    servers: list[ServerRecord]
    metadata: PageMetadata | None = None


class RegistryClient:
    """Fetch pages of the registry server listing.

    Instances are callable with an optional cursor, so a client can be handed
    straight to the paginator as its page fetcher.
    """

    def __init__(
        self,
        base_url: str = MCP_REGISTRY_URL,
        page_size: int = MAX_PAGE_SIZE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url
        self.page_size = max(1, min(page_size, MAX_PAGE_SIZE))
        self.client = httpx.Client(
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def fetch_page(self, cursor: str | None = None) -> Page:
        """Fetch one page starting at `cursor` (first page when None)."""
        params: dict[str, Any] = {"limit": self.page_size}
        if cursor:
            params["cursor"] = cursor

        logger.debug("GET %s params=%s", self.base_url, params)

        try:
            response = self.client.get(self.base_url, params=params)
        except httpx.TimeoutException as e:
            raise TransportFailure(
                f"Timed out fetching {self.base_url}", url=self.base_url
            ) from e
        except httpx.HTTPError as e:
            raise TransportFailure(
                f"Could not reach {self.base_url}: {e}", url=self.base_url
            ) from e

        if not response.is_success:
            raise TransportFailure(
                f"Registry returned HTTP {response.status_code}",
                url=str(response.url),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponse("Registry response is not valid JSON") from e

        return parse_page(data)

    __call__ = fetch_page

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def parse_page(data: Any) -> Page:
    """Validate a decoded list response and convert it to a Page."""
    if not isinstance(data, dict) or not isinstance(data.get("servers"), list):
        raise MalformedResponse("Invalid response from MCP registry: no servers list")

    try:
        page = RegistryPage.model_validate(data)
        entries = [record.to_entry() for record in page.servers]
    except ValidationError as e:
        raise MalformedResponse(
            f"Invalid response from MCP registry: {e.error_count()} validation error(s)"
        ) from e

    next_cursor = page.metadata.next_cursor if page.metadata else None
    logger.debug("Received %d servers, next cursor %r", len(entries), next_cursor)

    return Page(entries=entries, next_cursor=next_cursor or None)
