"""
PolicyKit Policy - Lifecycle Registry
=====================================
Versioned NEW/OLD behaviour switches with warn-once lifecycle
diagnostics.

Registration is explicit.
Reads never fail because of a diagnostic.
Each diagnostic scenario is shown once.
"""

from policykit.policy.catalog import (
    load_catalog,
    policy_from_mapping,
    read_catalog_entries,
    read_catalog_file,
    register_catalog,
)
from policykit.policy.diagnostics import (
    DiagnosticScenario,
    DiagnosticState,
    DiagnosticTracker,
    PolicyDiagnostic,
    PolicyState,
    classify,
)
from policykit.policy.engine import PolicyEngine, format_policy_info
from policykit.policy.exceptions import (
    DuplicatePolicyError,
    InvalidDefaultError,
    InvalidPolicyValueError,
    InvalidValueError,
    InvalidVersionError,
    InvalidVersionRangeError,
    MissingFieldError,
    PolicyCatalogError,
    PolicyError,
    PolicyNotRegisteredError,
)
from policykit.policy.records import (
    LifecycleStage,
    Policy,
    PolicyEntry,
    PolicyFields,
)
from policykit.policy.sinks import (
    DiagnosticSink,
    InMemoryDiagnosticSink,
    LoggingDiagnosticSink,
)
from policykit.policy.store import PolicyStore
from policykit.policy.values import PolicyValue, check_policy_value
from policykit.policy.versioning import (
    compare_gte,
    compare_versions,
    parse_version,
)

__all__ = [
    # ── Engine ────────────────────────────────────────────────
    "PolicyEngine",
    "format_policy_info",
    # ── Store / records ───────────────────────────────────────
    "PolicyStore",
    "Policy",
    "PolicyEntry",
    "PolicyFields",
    "LifecycleStage",
    "PolicyValue",
    "check_policy_value",
    # ── Diagnostics ───────────────────────────────────────────
    "DiagnosticTracker",
    "DiagnosticState",
    "DiagnosticScenario",
    "PolicyDiagnostic",
    "PolicyState",
    "classify",
    "DiagnosticSink",
    "LoggingDiagnosticSink",
    "InMemoryDiagnosticSink",
    # ── Versioning ────────────────────────────────────────────
    "parse_version",
    "compare_gte",
    "compare_versions",
    # ── Catalog ───────────────────────────────────────────────
    "policy_from_mapping",
    "load_catalog",
    "register_catalog",
    "read_catalog_entries",
    "read_catalog_file",
    # ── Exceptions ────────────────────────────────────────────
    "PolicyError",
    "DuplicatePolicyError",
    "PolicyNotRegisteredError",
    "MissingFieldError",
    "InvalidPolicyValueError",
    "InvalidDefaultError",
    "InvalidValueError",
    "InvalidVersionError",
    "InvalidVersionRangeError",
    "PolicyCatalogError",
]
