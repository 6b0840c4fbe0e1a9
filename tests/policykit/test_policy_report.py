"""
Tests for scripts/policy_report.py: catalog report runner.
"""

import json

import pytest

from scripts.policy_report import EXIT_OK, EXIT_POLICY_ERROR, main

CATALOG = [
    {
        "name": "CMP0001",
        "description": "Modern linking",
        "default": "OLD",
        "introduced_version": "3.0",
    },
    {
        "name": "CMP0002",
        "description": "Legacy include paths",
        "default": "OLD",
        "introduced_version": "2.8",
        "deprecated_version": "3.10",
        "removed_version": "4.0",
    },
]


@pytest.fixture(autouse=True)
def clean_environ(monkeypatch):
    for key in (
        "POLICYKIT_SET_HINT",
        "POLICYKIT_REPORT_DEFAULTS",
        "POLICYKIT_LOGGER_NAME",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "policies.json"
    path.write_text(json.dumps({"policies": CATALOG}), encoding="utf-8")
    return str(path)


class TestTextReport:
    def test_info_blocks(self, catalog_path, capsys):
        assert main([catalog_path]) == EXIT_OK
        out = capsys.readouterr().out
        assert "Policy Information for CMP0001:" in out
        assert "Policy Information for CMP0002:" in out
        assert "  Removed in version: 4.0" in out

    def test_minimum_applies_new(self, catalog_path, capsys):
        assert main([catalog_path, "--minimum", "2.9"]) == EXIT_OK
        blocks = capsys.readouterr().out.split("\n\n")
        assert "  Current value: OLD (default)" in blocks[0]
        assert "  Current value: NEW" in blocks[1]

    def test_set_then_get(self, catalog_path, capsys):
        code = main(
            [catalog_path, "--minimum", "3.0", "--set", "CMP0001=OLD",
             "--get", "CMP0001"]
        )
        assert code == EXIT_OK
        assert capsys.readouterr().out.rstrip().endswith("CMP0001: OLD")


class TestJsonReport:
    def test_fields_and_reads(self, catalog_path, capsys):
        code = main(
            [catalog_path, "--minimum", "1.0", "--maximum", "2.9", "--json",
             "--get", "CMP0002"]
        )
        assert code == EXIT_OK
        data = json.loads(capsys.readouterr().out)

        by_name = {p["name"]: p for p in data["policies"]}
        assert by_name["CMP0001"]["current_value"] == "OLD"
        assert by_name["CMP0001"]["is_default"] is False
        assert by_name["CMP0002"]["is_default"] is True
        assert data["reads"] == {"CMP0002": "OLD"}


class TestErrors:
    def test_invalid_value(self, catalog_path, capsys):
        code = main([catalog_path, "--set", "CMP0001=MAYBE"])
        assert code == EXIT_POLICY_ERROR
        assert "error: Value must be NEW or OLD" in capsys.readouterr().err

    def test_unknown_policy(self, catalog_path, capsys):
        assert main([catalog_path, "--get", "CMP9999"]) == EXIT_POLICY_ERROR
        assert "'CMP9999' is not registered" in capsys.readouterr().err

    def test_bad_range(self, catalog_path, capsys):
        code = main([catalog_path, "--minimum", "3.0", "--maximum", "2.0"])
        assert code == EXIT_POLICY_ERROR
        assert "MAXIMUM (2.0)" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        code = main([str(tmp_path / "absent.json")])
        assert code == EXIT_POLICY_ERROR
        assert capsys.readouterr().err.startswith("error:")

    def test_maximum_without_minimum(self, catalog_path):
        with pytest.raises(SystemExit) as exc_info:
            main([catalog_path, "--maximum", "3.0"])
        assert exc_info.value.code == 2

    def test_malformed_assignment(self, catalog_path):
        with pytest.raises(SystemExit):
            main([catalog_path, "--set", "CMP0001"])
