"""
Tests for CLI commands.
"""

from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from oparser.cli import app

runner = CliRunner()


@pytest.fixture
def workspace_dir(tmp_path, monkeypatch):
    """Initialize a workspace and make it the current directory."""
    workspace = tmp_path / "workspace"
    result = runner.invoke(app, ["init", str(workspace)])
    assert result.exit_code == 0
    monkeypatch.chdir(workspace)
    return workspace


def run_names(workspace):
    return sorted(p.name for p in (workspace / "lsts").iterdir())


class TestInit:
    """Tests for init command."""

    def test_init_creates_workspace(self, tmp_path):
        """Test that init creates workspace structure."""
        workspace_dir = tmp_path / "test-workspace"

        result = runner.invoke(app, ["init", str(workspace_dir)])

        assert result.exit_code == 0
        assert (workspace_dir / "oparser.yaml").exists()
        assert (workspace_dir / "lsts").exists()
        assert (workspace_dir / "cfgs").exists()

    def test_init_shows_next_steps(self, tmp_path):
        """Test that init shows helpful next steps."""
        result = runner.invoke(app, ["init", str(tmp_path / "ws")])

        assert "Next steps:" in result.stdout
        assert "oparser extract" in result.stdout


class TestExtract:
    """Tests for extract command."""

    def test_extract_family(self, workspace_dir, router_config):
        """Test a full extraction writes lists, configs and metadata."""
        result = runner.invoke(
            app, ["extract", "--file", str(router_config), "--interface", "Bundle-Ether7"]
        )

        assert result.exit_code == 0
        names = run_names(workspace_dir)
        assert len(names) == 1
        assert names[0].startswith("pe-router-01_")

        run = names[0]
        assert (workspace_dir / "lsts" / run / "level1.lst").exists()
        assert (workspace_dir / "cfgs" / run / "level2_rpl.cf").read_text().startswith(
            "route-policy CUSTOMER-A-IMPORT\n"
        )
        assert (workspace_dir / "cfgs" / run / "manifest.yaml").exists()
        assert (workspace_dir / "runs" / run / "extract.json").exists()

    def test_extract_short_options(self, workspace_dir, router_config):
        result = runner.invoke(app, ["extract", "-f", str(router_config), "-i", "Bundle-Ether7.100"])

        assert result.exit_code == 0

    def test_extract_reports_counts(self, workspace_dir, router_config):
        result = runner.invoke(
            app, ["extract", "--file", str(router_config), "--interface", "Bundle-Ether7"]
        )

        assert "policy_map: 1 extracted, 1 missing" in result.stdout
        assert "route_policy: 2 extracted" in result.stdout

    def test_extract_no_match_is_not_an_error(self, workspace_dir, router_config):
        result = runner.invoke(
            app, ["extract", "--file", str(router_config), "--interface", "Bundle-Ether99"]
        )

        assert result.exit_code == 0
        assert "No interface with a VRF matched" in result.stdout

    def test_invalid_interface(self, workspace_dir, router_config):
        """Test interface validation failure exits with its own code."""
        result = runner.invoke(
            app, ["extract", "--file", str(router_config), "--interface", "TenGigE0/0/0/1"]
        )

        assert result.exit_code == 79
        assert "Input validation failed" in result.stdout
        assert run_names(workspace_dir) == []

    def test_missing_file(self, workspace_dir):
        result = runner.invoke(
            app, ["extract", "--file", "/nonexistent/pe.cfg", "--interface", "Bundle-Ether7"]
        )

        assert result.exit_code == 80
        assert "File reading failed" in result.stdout

    def test_outside_workspace(self, tmp_path, monkeypatch, router_config):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(
            app, ["extract", "--file", str(router_config), "--interface", "Bundle-Ether7"]
        )

        assert result.exit_code == 88
        assert "No oparser workspace found at:" in result.stdout

    def test_failed_run_is_cleaned_up(self, workspace_dir, router_config):
        """Test partial run directories are deleted when extraction fails."""
        with patch("oparser.cli.write_configs", side_effect=OSError("disk full")):
            result = runner.invoke(
                app, ["extract", "--file", str(router_config), "--interface", "Bundle-Ether7"]
            )

        assert result.exit_code == 90
        assert run_names(workspace_dir) == []
        assert list((workspace_dir / "cfgs").iterdir()) == []

    def test_interrupted_run_is_cleaned_up(self, workspace_dir, router_config):
        with patch("oparser.cli.write_configs", side_effect=KeyboardInterrupt):
            runner.invoke(
                app, ["extract", "--file", str(router_config), "--interface", "Bundle-Ether7"]
            )

        assert run_names(workspace_dir) == []


class TestReplay:
    """Tests for replay command."""

    def test_replay_rewrites_configs(self, workspace_dir, router_config):
        runner.invoke(app, ["extract", "--file", str(router_config), "--interface", "Bundle-Ether7"])
        run = run_names(workspace_dir)[0]
        artifact = workspace_dir / "cfgs" / run / "level2_pm.cf"
        original = artifact.read_text()
        artifact.unlink()

        result = runner.invoke(app, ["replay", "--run", run, "--file", str(router_config)])

        assert result.exit_code == 0
        assert artifact.read_text() == original

    def test_replay_clears_resolved_diagnostics(self, workspace_dir, router_config, tmp_path):
        """Test diagnostics from the first write do not survive a cleaner replay."""
        runner.invoke(app, ["extract", "--file", str(router_config), "--interface", "Bundle-Ether7"])
        run = run_names(workspace_dir)[0]
        cfg_dir = workspace_dir / "cfgs" / run
        assert (cfg_dir / "level1_rstatic_empty.cf").exists()

        updated = tmp_path / "pe-router-01.cfg"
        updated.write_text(
            router_config.read_text()
            + "router static vrf NGDCS-CUSTOMER-B-01 address-family ipv4 unicast "
            "192.168.20.0/24 10.0.1.2\n"
            "router hsrp interface Bundle-Ether7.200 address-family ipv4 hsrp 2 "
            "address 10.0.1.3\n"
        )

        result = runner.invoke(app, ["replay", "--run", run, "--file", str(updated)])

        assert result.exit_code == 0
        assert sorted(p.name for p in cfg_dir.glob("level1_*_empty.cf")) == []
        manifest = yaml.safe_load((cfg_dir / "manifest.yaml").read_text())
        assert manifest["counts"]["router_static"] == {"extracted": 2, "missing": 0}

    def test_replay_missing_list(self, workspace_dir, router_config):
        """Test a missing intermediate list aborts the replay."""
        runner.invoke(app, ["extract", "--file", str(router_config), "--interface", "Bundle-Ether7"])
        run = run_names(workspace_dir)[0]
        (workspace_dir / "lsts" / run / "level2_rpl.lst").unlink()

        result = runner.invoke(app, ["replay", "--run", run, "--file", str(router_config)])

        assert result.exit_code == 80
        assert "Reading file failed" in result.stdout

    def test_replay_unknown_run(self, workspace_dir, router_config):
        result = runner.invoke(app, ["replay", "--run", "pe_0", "--file", str(router_config)])

        assert result.exit_code == 88
        assert "Run not found" in result.stdout


class TestOrder:
    """Tests for order command."""

    def test_apply_order(self):
        result = runner.invoke(app, ["order"])

        assert result.exit_code == 0
        lines = [line for line in result.stdout.splitlines() if ".cf" in line]
        assert lines[0].strip().startswith("1. policy_map")
        assert lines[-1].strip().endswith("level1_rbgp.cf")

    def test_removal_order(self):
        result = runner.invoke(app, ["order", "--removal"])

        lines = [line for line in result.stdout.splitlines() if ".cf" in line]
        assert "Removal order" in result.stdout
        assert lines[0].strip().endswith("level1_rbgp.cf")
        assert lines[-1].strip().endswith("level2_pm.cf")
