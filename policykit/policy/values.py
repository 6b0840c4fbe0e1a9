"""
PolicyKit Policy - Values
=========================
The two behaviours a policy can select.

NEW: the behaviour introduced by the policy.
OLD: the behaviour that existed before it.

Values are plain upper-case strings and comparison is case-sensitive:
"new" and "Old" are rejected.
"""

from __future__ import annotations

from typing import Type

from policykit.policy.exceptions import (
    InvalidPolicyValueError,
    InvalidValueError,
)


class PolicyValue:
    """Allowed policy values."""
    NEW = "NEW"
    OLD = "OLD"

    ALL = frozenset({"NEW", "OLD"})


def is_policy_value(value: object) -> bool:
    return isinstance(value, str) and value in PolicyValue.ALL


def check_policy_value(
    value: object,
    error: Type[InvalidPolicyValueError] = InvalidValueError,
) -> str:
    """Return value unchanged if it is NEW or OLD, else raise `error`."""
    if not is_policy_value(value):
        raise error(value)
    return value
