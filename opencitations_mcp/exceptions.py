"""Custom exception hierarchy for the OpenCitations MCP server."""


class OpenCitationsError(Exception):
    """Base exception for OpenCitations server errors."""


class ConfigError(OpenCitationsError):
    """Raised when configuration is invalid or incomplete."""
