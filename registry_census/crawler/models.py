"""Shared data models for registry entries."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Repository:
    """Source repository descriptor."""
    url: str
    source: str = ""


@dataclass(frozen=True)
class Remote:
    """Hosted endpoint descriptor (sse, streamable-http, ...)."""
    type: str
    url: str


@dataclass(frozen=True)
class EnvironmentVariable:
    """Environment variable a package expects at runtime."""
    name: str
    description: str = ""
    format: str = ""
    is_secret: bool = False
    is_required: bool | None = None


@dataclass(frozen=True)
class Package:
    """Install-from-package descriptor (npm, pypi, oci, ...)."""
    registry_type: str
    identifier: str
    transport_type: str = ""
    environment_variables: tuple[EnvironmentVariable, ...] = ()


@dataclass(frozen=True)
class RegistryMeta:
    """Official registry metadata attached to each entry."""
    status: str = ""
    published_at: str | None = None
    updated_at: str | None = None
    is_latest: bool = False


@dataclass(frozen=True)
class Entry:
    """One server record from the registry."""
    name: str
    version: str
    description: str = ""
    repository: Repository | None = None
    remotes: tuple[Remote, ...] = ()
    packages: tuple[Package, ...] = ()
    meta: RegistryMeta = field(default_factory=RegistryMeta)

    @property
    def key(self) -> str:
        """Identity used in reports."""
        return f"{self.name}@{self.version}"


@dataclass(frozen=True)
class Page:
    """One page of the registry listing."""
    entries: list[Entry]
    next_cursor: str | None = None
