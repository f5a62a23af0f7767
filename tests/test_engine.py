# Tests for agentsync.sync.engine and agentsync.sync.lock
# Full runs with the git step mocked out

from pathlib import Path
from unittest.mock import patch

import pytest

from agentsync.config.schema import ScanMode, Settings
from agentsync.git.operations import GitError, UnsupportedRemoteError
from agentsync.sync.engine import build_manifest, run_sync
from agentsync.sync.layout import RegistryLayout
from agentsync.sync.lock import SyncInProgressError, lock_path_for, sync_lock
from agentsync.sync.manifest import NoMappingsError, ScanRootMissingError
from agentsync.sync.planner import NoUsableScanRootsError


class TestRunSync:
    """Tests for run_sync."""

    @patch("agentsync.sync.engine.prepare_registry")
    def test_full_run(self, mock_prepare, engineering_registry: Path, make_settings, temp_home: Path, log):
        mock_prepare.return_value = engineering_registry
        settings = make_settings()

        summary = run_sync(settings, log, home_root=temp_home)

        mock_prepare.assert_called_once_with(settings.remote_url, settings.checkout_path, log)
        assert summary.checkout_path == engineering_registry
        assert summary.target_count == 1
        assert summary.mapping_count == 6
        assert summary.selected_roots == ["engineering"]
        assert summary.layout == RegistryLayout.TEAM_BASED
        assert (temp_home / ".cursor/skills/review/SKILL.md").exists()

    @patch("agentsync.sync.engine.prepare_registry")
    def test_logger_is_optional(self, mock_prepare, engineering_registry: Path, make_settings, temp_home: Path):
        mock_prepare.return_value = engineering_registry
        summary = run_sync(make_settings(), home_root=temp_home)
        assert summary.mapping_count == 6

    @patch("agentsync.sync.engine.prepare_registry")
    def test_dry_run(self, mock_prepare, engineering_registry: Path, make_settings, temp_home: Path, log):
        mock_prepare.return_value = engineering_registry
        summary = run_sync(make_settings(), log, home_root=temp_home, dry_run=True)

        assert summary.dry_run is True
        assert summary.mapping_count == 6
        assert list(temp_home.iterdir()) == []

    @patch("agentsync.sync.engine.prepare_registry", side_effect=GitError("offline"))
    def test_git_errors_propagate(self, mock_prepare, make_settings, log):
        with pytest.raises(GitError):
            run_sync(make_settings(), log)

    @patch("agentsync.utils.process.subprocess.run")
    def test_unsupported_remote_before_any_activity(self, mock_run, temp_dir: Path, log):
        # model_construct skips validation, as a caller building settings by hand might
        settings = Settings.model_construct(
            remote_url="ftp://example.com/repo",
            scan_mode=ScanMode.AUTO,
            scan_roots=["everyone"],
            checkout_path=str(temp_dir / "never-created"),
            strict_scan_roots=False,
        )
        with pytest.raises(UnsupportedRemoteError):
            run_sync(settings, log)

        mock_run.assert_not_called()
        assert not (temp_dir / "never-created").exists()
        assert log.entries == []

    @patch("agentsync.sync.engine.prepare_registry")
    def test_explicit_missing_root(self, mock_prepare, engineering_registry: Path, make_settings, temp_home: Path, log):
        mock_prepare.return_value = engineering_registry
        settings = make_settings(scan_mode=ScanMode.EXPLICIT, scan_roots=["finance"])

        with pytest.raises(NoUsableScanRootsError) as exc_info:
            run_sync(settings, log, home_root=temp_home)
        assert exc_info.value.missing_roots == ["finance"]
        assert list(temp_home.iterdir()) == []

    @patch("agentsync.sync.engine.prepare_registry")
    def test_strict_missing_root_writes_nothing(
        self, mock_prepare, engineering_registry: Path, make_settings, temp_home: Path, log
    ):
        mock_prepare.return_value = engineering_registry
        settings = make_settings(
            scan_mode=ScanMode.EXPLICIT, scan_roots=["engineering", "finance"], strict_scan_roots=True
        )

        with pytest.raises(ScanRootMissingError):
            run_sync(settings, log, home_root=temp_home)
        assert list(temp_home.iterdir()) == []


class TestBuildManifest:
    """Tests for build_manifest."""

    def test_legacy_checkout(self, legacy_registry: Path, make_settings, log):
        plan, manifest, layout = build_manifest(make_settings(scan_roots=["everyone"]), legacy_registry, log)

        assert layout == RegistryLayout.LEGACY_SHARED_GLOBAL
        assert plan.selected_roots == ["shared-global"]
        assert ("shared-global/claude/skills", ".claude/skills") in [
            (m.source, m.destination) for m in manifest.mappings
        ]

    def test_explicit_root_without_content(self, make_registry, make_settings, checkout: Path, log):
        make_registry({"eng/docs/a.md": "x", "skills/a/SKILL.md": "x"})
        with pytest.raises(NoMappingsError):
            build_manifest(make_settings(scan_mode=ScanMode.EXPLICIT, scan_roots=["eng"]), checkout, log)

    def test_strict_scan_roots(self, engineering_registry: Path, make_settings, log):
        settings = make_settings(
            scan_mode=ScanMode.EXPLICIT, scan_roots=["engineering", "finance"], strict_scan_roots=True
        )
        with pytest.raises(ScanRootMissingError) as exc_info:
            build_manifest(settings, engineering_registry, log)
        assert exc_info.value.path == engineering_registry / "finance"

    def test_lenient_scan_roots(self, engineering_registry: Path, make_settings, log):
        settings = make_settings(scan_mode=ScanMode.EXPLICIT, scan_roots=["engineering", "finance"])
        plan, manifest, _ = build_manifest(settings, engineering_registry, log)

        assert plan.missing_configured_roots == ["finance"]
        assert len(manifest) == 6

    def test_root_outside_checkout_not_scanned(
        self, make_registry, make_settings, checkout: Path, temp_dir: Path, log, write_tree
    ):
        write_tree(temp_dir, {"outside/skills/remote/SKILL.md": "x"})
        make_registry({"skills/local/SKILL.md": "x", "eng/rules/a.md": "x"})
        settings = make_settings(scan_mode=ScanMode.EXPLICIT, scan_roots=["../outside", "eng"])

        plan, manifest, _ = build_manifest(settings, checkout, log)
        assert plan.selected_roots == ["eng"]
        assert manifest.sources == ["eng/rules"]


class TestSyncLock:
    """Tests for the run lock."""

    def test_lock_path(self, temp_dir: Path):
        assert lock_path_for(temp_dir / "registry") == temp_dir / "registry.lock"

    def test_second_holder_is_refused(self, temp_dir: Path):
        checkout = temp_dir / "registry"
        with sync_lock(checkout) as lock_path:
            assert lock_path.exists()
            with pytest.raises(SyncInProgressError):
                with sync_lock(checkout):
                    pass

    def test_released_after_use(self, temp_dir: Path):
        checkout = temp_dir / "registry"
        with sync_lock(checkout):
            pass
        with sync_lock(checkout):
            pass
