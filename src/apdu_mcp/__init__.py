"""ISO 7816-4 APDU codec with an MCP tool surface."""

__version__ = "0.1.0"
