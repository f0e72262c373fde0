"""
Exception types raised by the tissue model.

Both concrete errors subclass ValueError so callers that already guard
model construction with ``except ValueError`` keep working.
"""


class DecoError(Exception):
    """Base class for all decosim errors."""


class ConfigurationError(DecoError, ValueError):
    """Malformed compartment table or configuration file."""


class InvalidArgumentError(DecoError, ValueError):
    """Value rejected at the call boundary (negative time, bad gas mix, ...)."""
