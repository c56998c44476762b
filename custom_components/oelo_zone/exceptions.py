"""Error types for the Oelo Lights Zone integration.

These are carried inside Outcome values between components. Only the
services layer turns them into HomeAssistantError for the caller.
"""

from __future__ import annotations


class OeloError(Exception):
    """Base class for Oelo zone errors."""


class TransportError(OeloError):
    """Controller unreachable, timed out, or answered with an unexpected body."""


class ValidationError(OeloError):
    """A command or parameter set was rejected before any network call."""


class PatternNotFoundError(ValidationError):
    """No stored pattern has the requested name."""


class CapacityError(OeloError):
    """All pattern slots are in use."""


class CommandSupersededError(OeloError):
    """A newer command replaced this one inside the debounce window."""
