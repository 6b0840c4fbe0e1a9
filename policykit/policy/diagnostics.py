"""
PolicyKit Policy - Diagnostic Tracker
=====================================
Warn-once lifecycle diagnostics, evaluated on every policy read.

State is computed from immutable metadata plus the "explicitly set" bit:

    REMOVED           removed_version present (set or not)
    DEPRECATED_UNSET  deprecated, no explicit value
    DEPRECATED_SET    deprecated, explicit value
    CURRENT_WARN      current, no explicit value, non-empty warning
    CURRENT_SILENT    everything else, never emits

Each emitting state owns one flag in DiagnosticState. A flag is raised
the first time its diagnostic is emitted and suppresses repeats.
clear() (called on every set) lowers the current/deprecated flags.
The removed flag is never lowered.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from threading import Lock
from typing import TYPE_CHECKING, Dict, Optional

from policykit.config.settings import EngineSettings
from policykit.policy.records import LifecycleStage, PolicyEntry

if TYPE_CHECKING:
    from policykit.policy.sinks import DiagnosticSink


# ══════════════════════════════════════════════════════════════
# STATES AND SCENARIOS
# ══════════════════════════════════════════════════════════════

class PolicyState(str, Enum):
    REMOVED = "REMOVED"
    DEPRECATED_SET = "DEPRECATED_SET"
    DEPRECATED_UNSET = "DEPRECATED_UNSET"
    CURRENT_WARN = "CURRENT_WARN"
    CURRENT_SILENT = "CURRENT_SILENT"


class DiagnosticScenario(str, Enum):
    """One warn-once slot. Value is the DiagnosticState attribute."""
    CURRENT = "warned_current"
    DEPRECATED_UNSET = "warned_deprecated_unset"
    DEPRECATED_SET = "warned_deprecated_set"
    REMOVED = "warned_removed"

    @property
    def resettable(self) -> bool:
        return self is not DiagnosticScenario.REMOVED


STATE_SCENARIOS: Dict[PolicyState, DiagnosticScenario] = {
    PolicyState.REMOVED: DiagnosticScenario.REMOVED,
    PolicyState.DEPRECATED_UNSET: DiagnosticScenario.DEPRECATED_UNSET,
    PolicyState.DEPRECATED_SET: DiagnosticScenario.DEPRECATED_SET,
    PolicyState.CURRENT_WARN: DiagnosticScenario.CURRENT,
}


def classify(entry: PolicyEntry) -> PolicyState:
    """Map a policy read to its diagnostic state. Removal wins."""
    policy = entry.policy
    stage = policy.lifecycle_stage

    if stage is LifecycleStage.REMOVED:
        return PolicyState.REMOVED

    if stage is LifecycleStage.DEPRECATED:
        if entry.is_explicitly_set:
            return PolicyState.DEPRECATED_SET
        return PolicyState.DEPRECATED_UNSET

    if not entry.is_explicitly_set and policy.has_warning:
        return PolicyState.CURRENT_WARN
    return PolicyState.CURRENT_SILENT


# ══════════════════════════════════════════════════════════════
# PER-POLICY STATE
# ══════════════════════════════════════════════════════════════

@dataclass
class DiagnosticState:
    warned_current: bool = False
    warned_deprecated_unset: bool = False
    warned_deprecated_set: bool = False
    warned_removed: bool = False

    def has_warned(self, scenario: DiagnosticScenario) -> bool:
        return getattr(self, scenario.value)

    def mark(self, scenario: DiagnosticScenario) -> None:
        setattr(self, scenario.value, True)

    def clear_resettable(self) -> None:
        for scenario in DiagnosticScenario:
            if scenario.resettable:
                setattr(self, scenario.value, False)


# ══════════════════════════════════════════════════════════════
# DIAGNOSTIC RECORD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PolicyDiagnostic:
    """One emitted lifecycle diagnostic."""

    policy_name: str
    scenario: DiagnosticScenario
    stage: LifecycleStage
    message: str


def format_message(
    entry: PolicyEntry,
    state: PolicyState,
    settings: EngineSettings,
) -> str:
    policy = entry.policy
    name = policy.name

    if state is PolicyState.REMOVED:
        return (
            f"Policy {name} was removed in version {policy.removed_version}. "
            f"This policy is no longer supported and should not be used."
        )

    if state is PolicyState.DEPRECATED_UNSET:
        return (
            f"Policy {name} is deprecated since version "
            f"{policy.deprecated_version}. "
            f"Please set this policy explicitly using "
            f"{settings.hint_for(name)}. "
            f"This policy will be removed in a future version."
        )

    if state is PolicyState.DEPRECATED_SET:
        return (
            f"Policy {name} is deprecated since version "
            f"{policy.deprecated_version} "
            f"and will be removed in a future version."
        )

    if state is PolicyState.CURRENT_WARN:
        return (
            f"Policy {name}: {policy.warning} "
            f"Please set this policy explicitly using "
            f"{settings.hint_for(name)}."
        )

    raise ValueError(f"State {state.value} has no diagnostic message.")


# ══════════════════════════════════════════════════════════════
# TRACKER
# ══════════════════════════════════════════════════════════════

class DiagnosticTracker:
    """
    Owns one DiagnosticState per policy and emits to a sink.

    Usage:
        tracker = DiagnosticTracker(sink=InMemoryDiagnosticSink())
        tracker.evaluate(store.get("CMP0001"))   # may emit
        tracker.clear("CMP0001")                 # on set
    """

    def __init__(
        self,
        sink: "DiagnosticSink",
        settings: Optional[EngineSettings] = None,
    ):
        self._sink = sink
        self._settings = settings or EngineSettings()
        self._states: Dict[str, DiagnosticState] = {}
        self._lock = Lock()

    @property
    def sink(self) -> "DiagnosticSink":
        return self._sink

    def evaluate(self, entry: PolicyEntry) -> Optional[PolicyDiagnostic]:
        """
        Emit the diagnostic for this read, unless already emitted.

        Returns the emitted diagnostic, or None when the state is silent
        or its flag is already raised.
        """
        state = classify(entry)
        scenario = STATE_SCENARIOS.get(state)
        if scenario is None:
            return None

        with self._lock:
            flags = self._states.setdefault(entry.name, DiagnosticState())
            if flags.has_warned(scenario):
                return None
            flags.mark(scenario)

        diagnostic = PolicyDiagnostic(
            policy_name=entry.name,
            scenario=scenario,
            stage=entry.policy.lifecycle_stage,
            message=format_message(entry, state, self._settings),
        )
        self._sink.emit(diagnostic)
        return diagnostic

    def clear(self, name: str, value: Optional[str] = None) -> None:
        """
        Lower the resettable flags for name.

        Signature matches the store's on_value_set listener; the value
        is not needed.
        """
        with self._lock:
            flags = self._states.get(name)
            if flags is not None:
                flags.clear_resettable()

    def state(self, name: str) -> DiagnosticState:
        """Copy of the flags for name (all False if never read)."""
        with self._lock:
            flags = self._states.get(name)
            if flags is None:
                return DiagnosticState()
            return replace(flags)
