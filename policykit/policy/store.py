"""
PolicyKit Policy - Policy Store
===============================
Append-only-by-name registry of policy metadata plus one mutable
current-value slot per policy.

Rules:
- A name registers exactly once; the first registration is never touched
- Metadata is immutable after registration
- The value slot is absent until set() is called (absent = use default)
- Listing order is registration order (bulk activation depends on it)
- Thread-safe for concurrent access

The store does not decide diagnostics. It only notifies its
on_value_set listener so the diagnostic tracker can reset.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, Dict, Optional, Tuple

from policykit.policy.exceptions import (
    DuplicatePolicyError,
    PolicyNotRegisteredError,
)
from policykit.policy.records import Policy, PolicyEntry
from policykit.policy.values import check_policy_value

logger = logging.getLogger("policykit.policy")

ValueSetListener = Callable[[str, str], None]


class PolicyStore:
    """
    Registry of policies and their current values.

    Usage:
        store = PolicyStore(on_value_set=tracker.clear)
        store.register(Policy("CMP0001", "Modern linking", "OLD", "3.0"))
        store.set("CMP0001", "NEW")
        entry = store.get("CMP0001")
        entry.effective_value   # 'NEW'
    """

    def __init__(self, on_value_set: Optional[ValueSetListener] = None):
        self._policies: Dict[str, Policy] = {}
        self._values: Dict[str, str] = {}
        self._on_value_set = on_value_set
        self._lock = Lock()

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def register(self, policy: Policy) -> None:
        """
        Register a policy record.

        Raises:
            TypeError: If policy is not a Policy.
            DuplicatePolicyError: If the name is already registered.
        """
        if not isinstance(policy, Policy):
            raise TypeError(
                f"Expected Policy instance, got {type(policy).__name__}."
            )

        with self._lock:
            if policy.name in self._policies:
                raise DuplicatePolicyError(policy.name)
            self._policies[policy.name] = policy

        logger.info(
            f"Policy registered: {policy.name} "
            f"introduced={policy.introduced_version} "
            f"default={policy.default} "
            f"stage={policy.lifecycle_stage.value}"
        )

    # ══════════════════════════════════════════════════════════
    # VALUE SLOT
    # ══════════════════════════════════════════════════════════

    def set(self, name: str, value: str) -> None:
        """
        Set the current value of a registered policy.

        Raises:
            PolicyNotRegisteredError: If name is unknown.
            InvalidValueError: If value is not NEW or OLD.
        """
        with self._lock:
            if name not in self._policies:
                raise PolicyNotRegisteredError(name)
            check_policy_value(value)
            self._values[name] = value

        logger.debug(f"Policy {name} set to {value}")

        if self._on_value_set is not None:
            self._on_value_set(name, value)

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def get(self, name: str) -> PolicyEntry:
        """Return the policy with its current value. Raises if unknown."""
        with self._lock:
            policy = self._policies.get(name)
            if policy is None:
                raise PolicyNotRegisteredError(name)
            return PolicyEntry(policy=policy, current_value=self._values.get(name))

    def list(self) -> Tuple[Policy, ...]:
        """All registered policies in registration order."""
        with self._lock:
            return tuple(self._policies.values())

    def contains(self, name: str) -> bool:
        with self._lock:
            return name in self._policies

    def count(self) -> int:
        with self._lock:
            return len(self._policies)
