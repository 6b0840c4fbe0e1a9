"""
Tests for policykit.policy.records: Policy validation, lifecycle stage,
value slot snapshots and the get_fields projection.
"""

import dataclasses

import pytest

from policykit.policy.exceptions import (
    InvalidDefaultError,
    InvalidPolicyValueError,
    InvalidValueError,
    InvalidVersionError,
    MissingFieldError,
)
from policykit.policy.records import (
    LifecycleStage,
    Policy,
    PolicyEntry,
    PolicyFields,
)
from policykit.policy.values import PolicyValue, check_policy_value


def make_policy(**overrides) -> Policy:
    fields = {
        "name": "CMP0001",
        "description": "Modern target_link_libraries usage",
        "default": "OLD",
        "introduced_version": "3.0",
    }
    fields.update(overrides)
    return Policy(**fields)


# ══════════════════════════════════════════════════════════════
# POLICY VALIDATION
# ══════════════════════════════════════════════════════════════

class TestPolicyValidation:
    def test_minimal_policy(self):
        policy = make_policy()
        assert policy.warning == ""
        assert policy.deprecated_version == ""
        assert policy.removed_version == ""

    @pytest.mark.parametrize(
        "field", ["name", "description", "default", "introduced_version"]
    )
    def test_required_field_empty(self, field):
        with pytest.raises(MissingFieldError) as exc_info:
            make_policy(**{field: ""})
        assert exc_info.value.field == field

    @pytest.mark.parametrize(
        "field", ["name", "description", "default", "introduced_version"]
    )
    def test_required_field_none(self, field):
        with pytest.raises(MissingFieldError):
            make_policy(**{field: None})

    def test_missing_fields_checked_before_default(self):
        with pytest.raises(MissingFieldError) as exc_info:
            make_policy(default="INVALID", introduced_version="")
        assert exc_info.value.field == "introduced_version"

    @pytest.mark.parametrize("bad", ["INVALID", "old", "New", " NEW"])
    def test_invalid_default(self, bad):
        with pytest.raises(InvalidDefaultError) as exc_info:
            make_policy(default=bad)
        assert exc_info.value.value == bad
        assert "Default must be NEW or OLD" in str(exc_info.value)

    @pytest.mark.parametrize("bad", [1, True, ["NEW"]])
    def test_non_string_default_is_invalid_not_missing(self, bad):
        with pytest.raises(InvalidDefaultError) as exc_info:
            make_policy(default=bad)
        assert exc_info.value.value == bad

    def test_non_string_introduced_version(self):
        with pytest.raises(InvalidVersionError):
            make_policy(introduced_version=3)

    @pytest.mark.parametrize("field", ["name", "description"])
    def test_non_string_name_or_description(self, field):
        with pytest.raises(TypeError, match=f"{field} must be a string"):
            make_policy(**{field: 42})

    def test_invalid_introduced_version(self):
        with pytest.raises(InvalidVersionError):
            make_policy(introduced_version="three")

    def test_invalid_deprecated_version(self):
        with pytest.raises(InvalidVersionError):
            make_policy(deprecated_version="4.x")

    def test_invalid_removed_version(self):
        with pytest.raises(InvalidVersionError):
            make_policy(removed_version="5.0.0.0")

    def test_none_optionals_normalised(self):
        policy = make_policy(
            warning=None, deprecated_version=None, removed_version=None
        )
        assert policy.warning == ""
        assert policy.deprecated_version == ""
        assert policy.removed_version == ""

    def test_frozen(self):
        policy = make_policy()
        with pytest.raises(dataclasses.FrozenInstanceError):
            policy.default = "NEW"

    def test_warning_kept_verbatim(self):
        text = 'Line 1 | pipe\nLine 2 with "quotes"  \n\'single\' ;semi'
        assert make_policy(warning=text).warning == text


# ══════════════════════════════════════════════════════════════
# LIFECYCLE STAGE
# ══════════════════════════════════════════════════════════════

class TestLifecycleStage:
    def test_current(self):
        assert make_policy().lifecycle_stage is LifecycleStage.CURRENT

    def test_deprecated(self):
        policy = make_policy(deprecated_version="4.0")
        assert policy.lifecycle_stage is LifecycleStage.DEPRECATED

    def test_removed(self):
        policy = make_policy(removed_version="5.0")
        assert policy.lifecycle_stage is LifecycleStage.REMOVED

    def test_removed_takes_precedence_over_deprecated(self):
        policy = make_policy(deprecated_version="4.0", removed_version="5.0")
        assert policy.lifecycle_stage is LifecycleStage.REMOVED


# ══════════════════════════════════════════════════════════════
# ENTRY + FIELDS
# ══════════════════════════════════════════════════════════════

class TestPolicyEntry:
    def test_unset_uses_default(self):
        entry = PolicyEntry(policy=make_policy(default="NEW"))
        assert not entry.is_explicitly_set
        assert entry.effective_value == "NEW"

    def test_set_overrides_default(self):
        entry = PolicyEntry(policy=make_policy(default="NEW"), current_value="OLD")
        assert entry.is_explicitly_set
        assert entry.effective_value == "OLD"
        assert entry.name == "CMP0001"


class TestPolicyFields:
    def test_from_unset_entry(self):
        fields = PolicyFields.from_entry(
            PolicyEntry(policy=make_policy(warning="careful"))
        )
        assert fields.current_value == "OLD"
        assert fields.is_default is True
        assert fields.warning == "careful"

    def test_from_set_entry(self):
        fields = PolicyFields.from_entry(
            PolicyEntry(policy=make_policy(), current_value="NEW")
        )
        assert fields.current_value == "NEW"
        assert fields.is_default is False

    def test_to_dict_keys(self):
        data = PolicyFields.from_entry(
            PolicyEntry(policy=make_policy())
        ).to_dict()
        assert set(data) == {
            "name",
            "description",
            "default",
            "introduced_version",
            "warning",
            "deprecated_version",
            "removed_version",
            "current_value",
            "is_default",
        }


# ══════════════════════════════════════════════════════════════
# VALUES
# ══════════════════════════════════════════════════════════════

class TestPolicyValue:
    def test_members(self):
        assert PolicyValue.ALL == {"NEW", "OLD"}

    def test_check_accepts(self):
        assert check_policy_value("NEW") == "NEW"
        assert check_policy_value("OLD") == "OLD"

    @pytest.mark.parametrize("bad", ["new", "INVALID", "", None, 1, True])
    def test_check_rejects(self, bad):
        with pytest.raises(InvalidValueError):
            check_policy_value(bad)

    def test_check_custom_error(self):
        with pytest.raises(InvalidDefaultError):
            check_policy_value("maybe", InvalidDefaultError)

    def test_error_hierarchy(self):
        assert issubclass(InvalidDefaultError, InvalidPolicyValueError)
        assert issubclass(InvalidValueError, InvalidPolicyValueError)
