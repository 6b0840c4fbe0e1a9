"""
PolicyKit
=========
Policy lifecycle registry for build configuration passes.
"""

from policykit.config import EngineSettings
from policykit.policy import (
    InMemoryDiagnosticSink,
    LoggingDiagnosticSink,
    PolicyEngine,
    PolicyError,
    PolicyValue,
)

__version__ = "1.0.0"

__all__ = [
    "EngineSettings",
    "PolicyEngine",
    "PolicyError",
    "PolicyValue",
    "InMemoryDiagnosticSink",
    "LoggingDiagnosticSink",
]
