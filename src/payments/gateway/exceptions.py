"""Errors raised by the gateway registry."""

from protean.exceptions import ConfigurationError


class UnknownGatewayError(ConfigurationError):
    """No gateway is registered under the requested identifier."""
