"""
PolicyKit Policy - Catalog
==========================
Build Policy records from plain data (JSON-shaped mappings) and register
them in one pass.

Accepted keys per entry (lower- or upper-case):
    name, description, default, introduced_version,
    warning, deprecated_version, removed_version

A catalog is either a list of entries or {"policies": [...]}.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Tuple, Union

from policykit.policy.engine import PolicyEngine
from policykit.policy.exceptions import DuplicatePolicyError, PolicyCatalogError
from policykit.policy.records import Policy

CATALOG_FIELDS = (
    "name",
    "description",
    "default",
    "introduced_version",
    "warning",
    "deprecated_version",
    "removed_version",
)


def policy_from_mapping(entry: Mapping[str, Any]) -> Policy:
    if not isinstance(entry, Mapping):
        raise PolicyCatalogError(
            f"entry must be an object, got {type(entry).__name__}"
        )

    kwargs = {}
    for key, value in entry.items():
        field = str(key).lower()
        if field not in CATALOG_FIELDS:
            raise PolicyCatalogError(f"unknown field '{key}'")
        if field in kwargs:
            raise PolicyCatalogError(f"field '{field}' given twice")
        if value is not None and not isinstance(value, str):
            # Whole-number versions (3) are read as text. A JSON float has
            # already lost its digits (3.10 parses as 3.1), so it is refused.
            if (
                field.endswith("_version")
                and isinstance(value, int)
                and not isinstance(value, bool)
            ):
                value = str(value)
            else:
                raise PolicyCatalogError(
                    f"field '{field}' must be a string, "
                    f"got {type(value).__name__}"
                )
        kwargs[field] = value

    for required in CATALOG_FIELDS[:4]:
        kwargs.setdefault(required, "")

    return Policy(**kwargs)


def load_catalog(entries: Iterable[Mapping[str, Any]]) -> Tuple[Policy, ...]:
    """Validate every entry; duplicates within the catalog are rejected."""
    policies = []
    seen = set()
    for entry in entries:
        policy = policy_from_mapping(entry)
        if policy.name in seen:
            raise DuplicatePolicyError(policy.name)
        seen.add(policy.name)
        policies.append(policy)
    return tuple(policies)


def register_catalog(
    engine: PolicyEngine,
    entries: Iterable[Mapping[str, Any]],
) -> Tuple[Policy, ...]:
    """
    Register a whole catalog.

    The catalog is validated before anything is registered, so a bad
    entry leaves the engine untouched. A clash with a policy already in
    the engine still fails at that entry.
    """
    policies = load_catalog(entries)
    for policy in policies:
        engine.register_policy(policy)
    return policies


def read_catalog_entries(path: Union[str, Path]) -> List[Mapping[str, Any]]:
    """Raw catalog entries from a JSON file, ready for register_catalog."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise PolicyCatalogError(f"{path}: not valid JSON ({exc})") from exc

    if isinstance(data, Mapping):
        if "policies" not in data:
            raise PolicyCatalogError(f"{path}: missing 'policies' list")
        data = data["policies"]

    if not isinstance(data, list):
        raise PolicyCatalogError(f"{path}: expected a list of policies")

    return data


def read_catalog_file(path: Union[str, Path]) -> Tuple[Policy, ...]:
    return load_catalog(read_catalog_entries(path))
