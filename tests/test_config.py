"""Tests for run configuration."""

from pathlib import Path

import pytest

from canary_inventory.config import (
    InventoryConfig,
    LockfileEntry,
    format_lockfile_entries,
    parse_fail_on_error,
    parse_include_dev,
    parse_lockfile_entries,
)
from canary_inventory.exceptions import LockfileEntryError


class TestLockfileEntries:
    """Test parsing of kind:path lists."""

    def test_parse_entries(self):
        entries = parse_lockfile_entries("npm:package-lock.json,requirements:requirements.txt")

        assert entries == [
            LockfileEntry("npm", "package-lock.json"),
            LockfileEntry("requirements", "requirements.txt"),
        ]

    def test_colon_in_path_is_kept(self):
        entries = parse_lockfile_entries("maven:C:/work/pom.xml")

        assert entries == [LockfileEntry("maven", "C:/work/pom.xml")]

    def test_malformed_entries_skipped(self):
        entries = parse_lockfile_entries(" , no-colon,npm:,cargo: Cargo.lock ,")

        assert entries == [LockfileEntry("cargo", "Cargo.lock")]

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_value(self, value):
        assert parse_lockfile_entries(value) == []

    def test_from_string_requires_colon(self):
        with pytest.raises(LockfileEntryError):
            LockfileEntry.from_string("package-lock.json")

    def test_format_round_trip(self):
        value = "go:svc/go.sum,poetry:poetry.lock"

        assert format_lockfile_entries(parse_lockfile_entries(value)) == value


class TestFlags:
    """Test the literal-string flag rules."""

    @pytest.mark.parametrize("value,expected", [
        ("false", False),
        ("true", True),
        ("False", True),
        ("0", True),
        ("", True),
        (None, True),
    ])
    def test_include_dev(self, value, expected):
        assert parse_include_dev(value) is expected

    @pytest.mark.parametrize("value,expected", [
        ("true", True),
        (None, True),
        ("false", False),
        ("TRUE", False),
        ("1", False),
        ("", False),
    ])
    def test_fail_on_error(self, value, expected):
        assert parse_fail_on_error(value) is expected


class TestInventoryConfig:
    """Test InventoryConfig."""

    def test_defaults(self):
        config = InventoryConfig()

        assert config.project_id == "unknown"
        assert config.include_dev is True
        assert config.parse_config.include_dev is True
        assert config.inventory_path == Path(".") / ".canary-inventory.json"
        assert config.github_output is None

    def test_derived_values(self):
        config = InventoryConfig(
            project_id="acme/web",
            include_dev=parse_include_dev("false"),
            working_dir=Path("/srv/app"),
            github_output=Path("/tmp/out"),
        )

        assert config.parse_config.include_dev is False
        assert config.inventory_path == Path("/srv/app/.canary-inventory.json")
