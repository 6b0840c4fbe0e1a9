"""
PolicyKit Config - Engine Settings
==================================
Host-configurable knobs for the policy engine.

The engine never reads the environment on its own. Hosts build
EngineSettings explicitly, or from an environment-like mapping:

    POLICYKIT_SET_HINT         how to tell users to set a policy;
                               must contain '{name}'
    POLICYKIT_REPORT_DEFAULTS  1/0, true/false, yes/no, on/off
    POLICYKIT_LOGGER_NAME      logger for engine activity
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_SET_HINT = "set_policy({name}, NEW) or set_policy({name}, OLD)"
DEFAULT_LOGGER_NAME = "policykit.policy"
ENV_PREFIX = "POLICYKIT_"

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def parse_bool(raw: str) -> bool:
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(
        f"Expected a boolean flag, got '{raw}'. "
        f"Use one of: {sorted(_TRUE_WORDS | _FALSE_WORDS)}"
    )


@dataclass(frozen=True)
class EngineSettings:
    """
    Policy engine configuration.

    Fields:
        set_hint:        Template naming how to set a policy explicitly.
                         Formatted with name=<policy name> and appended
                         to unset-policy warnings.
        report_defaults: Log an INFO notice whenever get() falls back to
                         a policy's default.
        logger_name:     Logger used for registry/engine activity.
    """

    set_hint: str = DEFAULT_SET_HINT
    report_defaults: bool = True
    logger_name: str = DEFAULT_LOGGER_NAME

    def __post_init__(self) -> None:
        if not self.set_hint or not isinstance(self.set_hint, str):
            raise ValueError("set_hint must be a non-empty string.")

        if "{name}" not in self.set_hint:
            raise ValueError("set_hint must contain the '{name}' placeholder.")

        try:
            self.set_hint.format(name="X")
        except (IndexError, KeyError, ValueError) as exc:
            raise ValueError(
                f"set_hint is not a valid template: {exc}"
            ) from exc

        if not isinstance(self.report_defaults, bool):
            raise ValueError("report_defaults must be a bool.")

        if not self.logger_name or not isinstance(self.logger_name, str):
            raise ValueError("logger_name must be a non-empty string.")

    def hint_for(self, name: str) -> str:
        return self.set_hint.format(name=name)

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, str],
        prefix: str = ENV_PREFIX,
    ) -> "EngineSettings":
        """Build settings from prefixed keys; absent keys keep defaults."""
        kwargs = {}

        set_hint: Optional[str] = mapping.get(f"{prefix}SET_HINT")
        if set_hint is not None:
            kwargs["set_hint"] = set_hint

        report_defaults = mapping.get(f"{prefix}REPORT_DEFAULTS")
        if report_defaults is not None:
            kwargs["report_defaults"] = parse_bool(report_defaults)

        logger_name = mapping.get(f"{prefix}LOGGER_NAME")
        if logger_name is not None:
            kwargs["logger_name"] = logger_name

        return cls(**kwargs)

    @classmethod
    def from_environ(cls) -> "EngineSettings":
        return cls.from_mapping(os.environ)
