"""
PolicyKit Policy - Diagnostic Sink Protocol and Implementations
===============================================================
Where lifecycle diagnostics go. The host chooses; the engine does
not print.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Tuple

from policykit.policy.diagnostics import DiagnosticScenario, PolicyDiagnostic

DIAGNOSTICS_LOGGER_NAME = "policykit.diagnostics"


class DiagnosticSink(Protocol):
    def emit(self, diagnostic: PolicyDiagnostic) -> None:
        ...


class LoggingDiagnosticSink:
    """
    Default sink: one WARNING record per diagnostic.

    The policy name and scenario ride along in `extra` so handlers can
    filter without parsing the message.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(DIAGNOSTICS_LOGGER_NAME)

    def emit(self, diagnostic: PolicyDiagnostic) -> None:
        self._logger.warning(
            diagnostic.message,
            extra={
                "policy_name": diagnostic.policy_name,
                "policy_scenario": diagnostic.scenario.value,
            },
        )


class InMemoryDiagnosticSink:
    """
    Deterministic in-memory sink used by tests/tooling.
    """

    def __init__(self):
        self._diagnostics: List[PolicyDiagnostic] = []

    def emit(self, diagnostic: PolicyDiagnostic) -> None:
        self._diagnostics.append(diagnostic)

    @property
    def diagnostics(self) -> Tuple[PolicyDiagnostic, ...]:
        return tuple(self._diagnostics)

    def messages(self) -> Tuple[str, ...]:
        return tuple(d.message for d in self._diagnostics)

    def for_policy(self, name: str) -> Tuple[PolicyDiagnostic, ...]:
        return tuple(d for d in self._diagnostics if d.policy_name == name)

    def count(self, scenario: Optional[DiagnosticScenario] = None) -> int:
        if scenario is None:
            return len(self._diagnostics)
        return sum(1 for d in self._diagnostics if d.scenario is scenario)

    def clear(self) -> None:
        self._diagnostics.clear()
