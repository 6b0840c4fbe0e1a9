"""
PolicyKit Policy - Policy Engine
================================
Public surface of the policy registry.

Composes:
    PolicyStore        metadata + current values
    DiagnosticTracker  warn-once lifecycle diagnostics
    versioning         ordering for bulk activation

The engine is an explicit object. There is no process-wide registry:
every call site that needs policies receives the engine.

Read path (get):
    1. tracker evaluates the read (may emit one diagnostic)
    2. current value if set, else default

Write path (set / version):
    store.set → tracker.clear (current/deprecated flags only)
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Dict, Optional, Tuple

from policykit.config.settings import EngineSettings
from policykit.policy.diagnostics import DiagnosticState, DiagnosticTracker
from policykit.policy.exceptions import (
    InvalidVersionRangeError,
    MissingFieldError,
)
from policykit.policy.records import Policy, PolicyEntry, PolicyFields
from policykit.policy.sinks import DiagnosticSink, LoggingDiagnosticSink
from policykit.policy.store import PolicyStore
from policykit.policy.values import PolicyValue
from policykit.policy.versioning import (
    compare_gte,
    compare_versions,
    parse_version,
)


class PolicyEngine:
    """
    Policy registry with lifecycle diagnostics.

    Usage:
        engine = PolicyEngine(sink=InMemoryDiagnosticSink())
        engine.register(
            "CMP0001",
            "Modern target_link_libraries usage",
            "OLD",
            "3.0",
            warning="Use PUBLIC/PRIVATE/INTERFACE keywords",
        )
        engine.version("3.2")            # everything up to 3.2 → NEW
        if engine.get("CMP0001") == "NEW":
            ...
    """

    def __init__(
        self,
        sink: Optional[DiagnosticSink] = None,
        settings: Optional[EngineSettings] = None,
    ):
        self._settings = settings or EngineSettings()
        self._logger = logging.getLogger(self._settings.logger_name)
        self._tracker = DiagnosticTracker(
            sink=sink or LoggingDiagnosticSink(),
            settings=self._settings,
        )
        self._store = PolicyStore(on_value_set=self._tracker.clear)
        self._lock = RLock()

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def sink(self) -> DiagnosticSink:
        return self._tracker.sink

    # ══════════════════════════════════════════════════════════
    # REGISTRATION
    # ══════════════════════════════════════════════════════════

    def register(
        self,
        name: str,
        description: str,
        default: str,
        introduced_version: str,
        warning: Optional[str] = "",
        deprecated_version: Optional[str] = "",
        removed_version: Optional[str] = "",
    ) -> Policy:
        """
        Register a new policy.

        Raises:
            MissingFieldError: name/description/default/introduced_version
                absent or empty.
            InvalidDefaultError: default is not NEW or OLD.
            InvalidVersionError: a version is malformed.
            DuplicatePolicyError: name already registered.
        """
        policy = Policy(
            name=name,
            description=description,
            default=default,
            introduced_version=introduced_version,
            warning=warning or "",
            deprecated_version=deprecated_version or "",
            removed_version=removed_version or "",
        )
        return self.register_policy(policy)

    def register_policy(self, policy: Policy) -> Policy:
        with self._lock:
            self._store.register(policy)
        return policy

    # ══════════════════════════════════════════════════════════
    # SET / GET
    # ══════════════════════════════════════════════════════════

    def set(self, name: str, value: str) -> None:
        """
        Explicitly choose NEW or OLD for a policy.

        Re-arms the current/deprecated diagnostics for that policy.
        A removal notice already shown stays shown.
        """
        if not name:
            raise MissingFieldError("name", operation="set")
        if not value:
            raise MissingFieldError("value", operation="set")
        with self._lock:
            self._store.set(name, value)

    def get(self, name: str) -> str:
        """
        Return the effective value of a policy.

        Emits at most one lifecycle diagnostic per scenario. Diagnostics
        never change the returned value.
        """
        if not name:
            raise MissingFieldError("name", operation="get")

        with self._lock:
            entry = self._store.get(name)
            self._tracker.evaluate(entry)

        if not entry.is_explicitly_set and self._settings.report_defaults:
            self._logger.info(
                f"'{name}' not set, using default: {entry.policy.default}"
            )
        return entry.effective_value

    # ══════════════════════════════════════════════════════════
    # BULK ACTIVATION
    # ══════════════════════════════════════════════════════════

    def version(
        self,
        minimum: str,
        maximum: Optional[str] = None,
    ) -> Dict[str, str]:
        """
        Set many policies from a compatibility range.

        For each policy, in registration order:
            1. introduced <= minimum  → NEW
            2. introduced >  maximum  → OLD   (only if maximum given)

        The maximum is inclusive: a policy introduced exactly at maximum
        is not forced to OLD. minimum == maximum is allowed.

        Returns:
            {policy name: value it ended with} for every policy touched,
            in registration order.

        Raises:
            MissingFieldError: minimum absent.
            InvalidVersionError: minimum/maximum malformed.
            InvalidVersionRangeError: maximum < minimum.
        """
        if not minimum:
            raise MissingFieldError("minimum", operation="version")

        parse_version(minimum)
        use_max = bool(maximum)
        if use_max and compare_versions(maximum, minimum) < 0:
            raise InvalidVersionRangeError(minimum, maximum)

        applied: Dict[str, str] = {}
        with self._lock:
            for policy in self._store.list():
                if compare_gte(minimum, policy.introduced_version):
                    self.set(policy.name, PolicyValue.NEW)
                    applied[policy.name] = PolicyValue.NEW
                if use_max and not compare_gte(
                    maximum, policy.introduced_version
                ):
                    self.set(policy.name, PolicyValue.OLD)
                    applied[policy.name] = PolicyValue.OLD

        range_text = f"{minimum}...{maximum}" if use_max else minimum
        self._logger.info(
            f"Policy version {range_text} applied: "
            f"{sum(1 for v in applied.values() if v == PolicyValue.NEW)} NEW, "
            f"{sum(1 for v in applied.values() if v == PolicyValue.OLD)} OLD"
        )
        return applied

    # ══════════════════════════════════════════════════════════
    # INTROSPECTION (no diagnostics)
    # ══════════════════════════════════════════════════════════

    def get_fields(self, name: str) -> PolicyFields:
        if not name:
            raise MissingFieldError("name", operation="get_fields")
        return PolicyFields.from_entry(self._entry(name))

    def info(self, name: str) -> str:
        """
        Human-readable summary of a policy. Also logged at INFO.
        """
        if not name:
            raise MissingFieldError("name", operation="info")
        text = format_policy_info(self._entry(name))
        for line in text.splitlines():
            self._logger.info(line)
        return text

    def is_registered(self, name: str) -> bool:
        return self._store.contains(name)

    def policies(self) -> Tuple[str, ...]:
        """Registered policy names in registration order."""
        return tuple(p.name for p in self._store.list())

    def diagnostic_state(self, name: str) -> DiagnosticState:
        self._entry(name)
        return self._tracker.state(name)

    def _entry(self, name: str) -> PolicyEntry:
        with self._lock:
            return self._store.get(name)


def format_policy_info(entry: PolicyEntry) -> str:
    policy = entry.policy
    if entry.is_explicitly_set:
        current = entry.current_value
    else:
        current = f"{policy.default} (default)"

    lines = [
        f"Policy Information for {policy.name}:",
        f"  Description: {policy.description}",
        f"  Default: {policy.default}",
        f"  Introduced in version: {policy.introduced_version}",
        f"  Current value: {current}",
    ]
    if policy.deprecated_version:
        lines.append(f"  Deprecated in version: {policy.deprecated_version}")
    if policy.removed_version:
        lines.append(f"  Removed in version: {policy.removed_version}")
    if policy.warning:
        lines.append(f"  Warning: {policy.warning}")
    return "\n".join(lines)
