"""
PolicyKit Policy - Records
==========================
Policy: immutable metadata, validated at construction.
PolicyEntry: metadata plus the current value slot, as read from the store.
PolicyFields: flat read-only projection returned by get_fields().

Lifecycle stage is derived, never stored:
    removed_version present     → REMOVED
    else deprecated_version     → DEPRECATED
    else                        → CURRENT
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from policykit.policy.exceptions import InvalidDefaultError, MissingFieldError
from policykit.policy.values import check_policy_value
from policykit.policy.versioning import parse_version


# ══════════════════════════════════════════════════════════════
# LIFECYCLE STAGE
# ══════════════════════════════════════════════════════════════

class LifecycleStage(str, Enum):
    CURRENT = "CURRENT"
    DEPRECATED = "DEPRECATED"
    REMOVED = "REMOVED"


# ══════════════════════════════════════════════════════════════
# POLICY (immutable metadata)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Policy:
    """
    Registered policy metadata.

    Fields:
        name:               Unique, case-sensitive key (e.g. 'CMP0001').
        description:        What the policy controls.
        default:            NEW | OLD, used while no value is set.
        introduced_version: Version the policy appeared in.
        warning:            Shown on unset reads of a CURRENT policy.
                            Empty means no warning. Kept verbatim.
        deprecated_version: Non-empty marks the policy DEPRECATED.
        removed_version:    Non-empty marks the policy REMOVED.

    Optional fields given as None are normalised to "".
    """

    name: str
    description: str
    default: str
    introduced_version: str
    warning: str = ""
    deprecated_version: str = ""
    removed_version: str = ""

    def __post_init__(self):
        for field_name in (
            "name", "description", "default", "introduced_version"
        ):
            value = getattr(self, field_name)
            if value is None or value == "":
                raise MissingFieldError(field_name)

        for field_name in ("name", "description"):
            value = getattr(self, field_name)
            if not isinstance(value, str):
                raise TypeError(
                    f"{field_name} must be a string, got {type(value).__name__}."
                )

        for field_name in ("warning", "deprecated_version", "removed_version"):
            if getattr(self, field_name) is None:
                object.__setattr__(self, field_name, "")

        # Non-string defaults and versions fail their own checks below.
        check_policy_value(self.default, InvalidDefaultError)

        parse_version(self.introduced_version)
        if self.deprecated_version:
            parse_version(self.deprecated_version)
        if self.removed_version:
            parse_version(self.removed_version)

    @property
    def lifecycle_stage(self) -> LifecycleStage:
        if self.removed_version:
            return LifecycleStage.REMOVED
        if self.deprecated_version:
            return LifecycleStage.DEPRECATED
        return LifecycleStage.CURRENT

    @property
    def has_warning(self) -> bool:
        return self.warning != ""


# ══════════════════════════════════════════════════════════════
# POLICY ENTRY (metadata + current value)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PolicyEntry:
    """Snapshot of a policy and its current value at read time."""

    policy: Policy
    current_value: Optional[str] = None

    @property
    def name(self) -> str:
        return self.policy.name

    @property
    def is_explicitly_set(self) -> bool:
        return self.current_value is not None

    @property
    def effective_value(self) -> str:
        if self.current_value is None:
            return self.policy.default
        return self.current_value


# ══════════════════════════════════════════════════════════════
# POLICY FIELDS (get_fields projection)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PolicyFields:
    name: str
    description: str
    default: str
    introduced_version: str
    warning: str
    deprecated_version: str
    removed_version: str
    current_value: str
    is_default: bool

    @classmethod
    def from_entry(cls, entry: PolicyEntry) -> "PolicyFields":
        policy = entry.policy
        return cls(
            name=policy.name,
            description=policy.description,
            default=policy.default,
            introduced_version=policy.introduced_version,
            warning=policy.warning,
            deprecated_version=policy.deprecated_version,
            removed_version=policy.removed_version,
            current_value=entry.effective_value,
            is_default=not entry.is_explicitly_set,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "default": self.default,
            "introduced_version": self.introduced_version,
            "warning": self.warning,
            "deprecated_version": self.deprecated_version,
            "removed_version": self.removed_version,
            "current_value": self.current_value,
            "is_default": self.is_default,
        }
