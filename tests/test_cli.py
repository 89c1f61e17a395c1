"""Tests for the command line interface."""

import json
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from canary_inventory.cli.main import app
from canary_inventory.exceptions import SubmissionError
from canary_inventory.submit.client import SubmissionResult

runner = CliRunner()

PACKAGE_LOCK = {
    "lockfileVersion": 3,
    "packages": {
        "": {"name": "web"},
        "node_modules/lodash": {"version": "4.17.21"},
        "node_modules/jest": {"version": "29.0.0", "dev": True},
    },
}


@pytest.fixture
def github_output(tmp_path):
    return tmp_path / "github_output"


def _outputs(path):
    return dict(line.split("=", 1) for line in path.read_text(encoding="utf-8").splitlines())


def _invoke(args, github_output):
    return runner.invoke(app, args, env={"GITHUB_OUTPUT": str(github_output)})


class TestDiscoverCommand:
    """Test the discover command."""

    def test_discover(self, tmp_path, github_output):
        project = tmp_path / "project"
        (project / "web").mkdir(parents=True)
        (project / "web" / "package-lock.json").write_text("{}", encoding="utf-8")
        (project / "poetry.lock").write_text("", encoding="utf-8")

        result = _invoke(["discover", str(project)], github_output)

        assert result.exit_code == 0
        outputs = _outputs(github_output)
        assert outputs["count"] == "2"
        assert outputs["lockfiles"] == ",".join([
            f"poetry:{project / 'poetry.lock'}",
            f"npm:{project / 'web' / 'package-lock.json'}",
        ])

    def test_discover_nothing_found(self, tmp_path, github_output):
        project = tmp_path / "empty"
        project.mkdir()

        result = _invoke(["discover", str(project)], github_output)

        assert result.exit_code == 0
        assert "::warning::No lockfiles found" in result.output
        assert _outputs(github_output) == {"lockfiles": "", "count": "0"}

    def test_discover_missing_directory(self, tmp_path, github_output):
        result = _invoke(["discover", str(tmp_path / "missing")], github_output)

        assert result.exit_code == 1


class TestParseCommand:
    """Test the parse command."""

    def test_parse(self, tmp_path, github_output):
        lockfile = tmp_path / "package-lock.json"
        lockfile.write_text(json.dumps(PACKAGE_LOCK), encoding="utf-8")

        result = _invoke([
            "parse",
            "--lockfiles", f"npm:{lockfile},pnpm:pnpm-lock.yaml",
            "--project-id", "acme/web",
            "--working-dir", str(tmp_path),
        ], github_output)

        assert result.exit_code == 0
        inventory_path = tmp_path / ".canary-inventory.json"
        document = json.loads(inventory_path.read_text(encoding="utf-8"))
        assert document["project_id"] == "acme/web"
        assert document["source"] == "github-action"
        assert [dep["name"] for dep in document["dependencies"]] == ["lodash", "jest"]
        assert _outputs(github_output) == {
            "packages_count": "2",
            "inventory_path": str(inventory_path),
        }

    def test_parse_without_dev(self, tmp_path, github_output):
        lockfile = tmp_path / "package-lock.json"
        lockfile.write_text(json.dumps(PACKAGE_LOCK), encoding="utf-8")

        result = _invoke([
            "parse",
            "--lockfiles", f"npm:{lockfile}",
            "--include-dev", "false",
            "--working-dir", str(tmp_path),
        ], github_output)

        assert result.exit_code == 0
        document = json.loads((tmp_path / ".canary-inventory.json").read_text(encoding="utf-8"))
        assert document["project_id"] == "unknown"
        assert [dep["name"] for dep in document["dependencies"]] == ["lodash"]

    def test_parse_deduplicates_across_files(self, tmp_path, github_output):
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        (tmp_path / "a" / "requirements.txt").write_text("flask==2.0.0\n", encoding="utf-8")
        (tmp_path / "b" / "requirements.txt").write_text("flask==2.0.0\nclick==8.1.0\n", encoding="utf-8")

        result = _invoke([
            "parse",
            "--lockfiles",
            f"requirements:{tmp_path / 'a' / 'requirements.txt'},requirements:{tmp_path / 'b' / 'requirements.txt'}",
            "--working-dir", str(tmp_path),
        ], github_output)

        assert result.exit_code == 0
        document = json.loads((tmp_path / ".canary-inventory.json").read_text(encoding="utf-8"))
        assert [dep["name"] for dep in document["dependencies"]] == ["flask", "click"]
        assert document["dependencies"][0]["lockfile_source"] == str(tmp_path / "a" / "requirements.txt")

    def test_parse_no_lockfiles(self, tmp_path, github_output):
        result = _invoke(["parse", "--lockfiles", "", "--working-dir", str(tmp_path)], github_output)

        assert result.exit_code == 0
        assert "No lockfiles to parse" in result.output
        document = json.loads((tmp_path / ".canary-inventory.json").read_text(encoding="utf-8"))
        assert document["dependencies"] == []
        assert _outputs(github_output)["packages_count"] == "0"


class TestSubmitCommand:
    """Test the submit command."""

    @pytest.fixture
    def inventory_file(self, tmp_path):
        path = tmp_path / ".canary-inventory.json"
        path.write_text(json.dumps({
            "project_id": "p",
            "generated_at": "2024-05-01T12:00:00.000Z",
            "source": "github-action",
            "dependencies": [
                {"ecosystem": "npm", "name": "lodash", "version": "4.17.21"},
                {"ecosystem": "pypi", "name": "flask", "version": "2.0.0"},
            ],
        }), encoding="utf-8")
        return path

    def _args(self, inventory_file, *extra):
        return [
            "submit",
            "--worker-url", "https://worker.example.com",
            "--auth-token", "secret",
            "--inventory-path", str(inventory_file),
            *extra,
        ]

    def test_submit_success(self, inventory_file, github_output):
        with patch("canary_inventory.cli.main._submit", new=AsyncMock(return_value=SubmissionResult(200, "queued"))) as submit:
            result = _invoke(self._args(inventory_file), github_output)

        assert result.exit_code == 0
        assert "Submitting inventory with 2 packages to https://worker.example.com/ingest" in result.output
        assert "Response code: 200" in result.output
        assert _outputs(github_output) == {"packages_count": "2", "status": "success"}
        submit.assert_awaited_once_with("https://worker.example.com", "secret", inventory_file, 2)

    def test_submit_failure_is_fatal_by_default(self, inventory_file, github_output):
        with patch("canary_inventory.cli.main._submit", new=AsyncMock(return_value=SubmissionResult(401, "denied"))):
            result = _invoke(self._args(inventory_file), github_output)

        assert result.exit_code == 1
        assert "::error::Failed to submit inventory: HTTP 401 - denied" in result.output
        assert _outputs(github_output)["status"] == "failed"

    def test_submit_failure_tolerated(self, inventory_file, github_output):
        with patch("canary_inventory.cli.main._submit", new=AsyncMock(return_value=SubmissionResult(500, "down"))):
            result = _invoke(self._args(inventory_file, "--fail-on-error", "false"), github_output)

        assert result.exit_code == 0
        assert "::warning::Submission failed but fail_on_error is false, continuing" in result.output
        assert _outputs(github_output) == {"packages_count": "2", "status": "failed"}

    def test_submit_network_failure(self, inventory_file, github_output):
        with patch("canary_inventory.cli.main._submit", new=AsyncMock(side_effect=SubmissionError("refused"))):
            result = _invoke(self._args(inventory_file), github_output)

        assert result.exit_code == 1
        assert _outputs(github_output)["status"] == "failed"

    def test_submit_missing_inventory(self, tmp_path, github_output):
        with patch("canary_inventory.cli.main._submit", new=AsyncMock()) as submit:
            result = _invoke(self._args(tmp_path / "missing.json"), github_output)

        assert result.exit_code == 1
        assert "::error::Inventory file not found" in result.output
        submit.assert_not_called()

    def test_submit_invalid_inventory(self, tmp_path, github_output):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with patch("canary_inventory.cli.main._submit", new=AsyncMock()) as submit:
            result = _invoke(self._args(path), github_output)

        assert result.exit_code == 1
        submit.assert_not_called()


class TestInfoCommand:
    """Test the info command."""

    def test_info_lists_kinds(self):
        result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        for kind in ("npm", "requirements", "poetry", "go", "rubygems", "cargo", "composer", "nuget", "maven"):
            assert kind in result.output
