"""
PolicyKit Policy - Exceptions
=============================
Structured errors for policy registry operations.

These are configuration errors raised by the calling operation.
Lifecycle diagnostics (deprecation, removal, unset warnings) are NOT
errors: they flow through the DiagnosticSink and never abort a call.
"""

from __future__ import annotations


class PolicyError(Exception):
    """Base error for policy registry operations."""
    pass


class DuplicatePolicyError(PolicyError):
    """Policy with the same name already registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Policy '{name}' is already registered.")


class PolicyNotRegisteredError(PolicyError):
    """Operation on a policy name that was never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Policy '{name}' is not registered.")


class MissingFieldError(PolicyError):
    """A required argument was absent or empty."""

    def __init__(self, field: str, operation: str = "register"):
        self.field = field
        self.operation = operation
        super().__init__(f"{operation}: requires {field}.")


class InvalidPolicyValueError(PolicyError):
    """Value outside the NEW/OLD set."""

    role = "Value"

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"{self.role} must be NEW or OLD (got '{value}')."
        )


class InvalidDefaultError(InvalidPolicyValueError):
    """Registered default is not NEW or OLD."""

    role = "Default"


class InvalidValueError(InvalidPolicyValueError):
    """Explicitly set value is not NEW or OLD."""

    role = "Value"


class InvalidVersionError(PolicyError):
    """Version string is not 1-3 dot-separated non-negative integers."""

    def __init__(self, version: object, reason: str = ""):
        self.version = version
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Invalid version '{version}'{detail}.")


class InvalidVersionRangeError(PolicyError):
    """Bulk activation called with maximum < minimum."""

    def __init__(self, minimum: str, maximum: str):
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"MAXIMUM ({maximum}) must be greater than or equal to "
            f"MINIMUM ({minimum})."
        )


class PolicyCatalogError(PolicyError):
    """Catalog input could not be turned into policy records."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid policy catalog: {detail}")
