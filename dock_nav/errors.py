"""Exception types raised by the navigation controller.

All of them are fatal for the controller: they signal a configuration or
logic bug upstream and are never caught and retried inside ``dock_nav``.
"""

from __future__ import annotations


class DockNavError(Exception):
    """Base class for controller errors."""


class ConfigurationError(DockNavError):
    """Required parameters are missing or invalid; the controller must not start."""


class InvariantViolation(DockNavError):
    """Controller state reached a combination the decision logic cannot handle."""


class ScanConfigurationError(InvariantViolation):
    """A configured index does not fit inside the incoming scan."""
