"""Census of the MCP registry: which servers can be bundled from source."""

__version__ = "0.1.0"
