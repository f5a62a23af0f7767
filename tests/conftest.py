# AgentSync Test Fixtures
# Pytest fixtures for AgentSync tests

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import yaml

from agentsync.config.schema import ScanMode, Settings
from agentsync.logger import LogLevel


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create files (and parent dirs) under root from a {relative_path: content} dict."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


class LogCapture:
    """Logging callback that records every line."""

    def __init__(self):
        self.entries: list[tuple[LogLevel, str]] = []

    def __call__(self, level: LogLevel, message: str) -> None:
        self.entries.append((level, message))

    def messages(self, level: LogLevel | None = None) -> list[str]:
        return [m for lvl, m in self.entries if level is None or lvl == level]

    def contains(self, text: str, level: LogLevel | None = None) -> bool:
        return any(text in m for m in self.messages(level))


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def log() -> LogCapture:
    """Recording logger."""
    return LogCapture()


@pytest.fixture
def checkout(temp_dir: Path) -> Path:
    """Empty registry checkout directory."""
    path = temp_dir / "registry"
    path.mkdir()
    return path


@pytest.fixture
def make_registry(checkout: Path) -> Callable[[dict[str, str]], Path]:
    """Populate the registry checkout with files."""

    def _make(files: dict[str, str]) -> Path:
        return write_files(checkout, files)

    return _make


@pytest.fixture
def engineering_registry(make_registry) -> Path:
    """Registry with one engineering team holding a skill and a rule."""
    return make_registry(
        {
            "engineering/skills/review/SKILL.md": "# Review\n",
            "engineering/rules/style.md": "Use black.\n",
        }
    )


@pytest.fixture
def legacy_registry(make_registry) -> Path:
    """Registry in the old shared-global layout with tool-specific folders."""
    return make_registry(
        {
            "shared-global/claude/skills/deploy/SKILL.md": "# Deploy\n",
            "shared-global/cursor/rules/lint.mdc": "lint\n",
            "shared-global/skills/common/SKILL.md": "# Common\n",
        }
    )


@pytest.fixture
def make_settings(checkout: Path) -> Callable[..., Settings]:
    """Build Settings pointing at the test checkout."""

    def _make(**overrides) -> Settings:
        values = {
            "remote_url": "git@github.com:acme/registry.git",
            "scan_mode": ScanMode.AUTO,
            "scan_roots": [],
            "checkout_path": str(checkout),
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def config_file(temp_dir: Path, monkeypatch: pytest.MonkeyPatch, checkout: Path) -> Path:
    """Write a valid config file and point AGENTSYNC_CONFIG at it."""
    path = temp_dir / "config" / "config.yaml"
    path.parent.mkdir(parents=True)
    data = {
        "registry": {
            "remote_url": "https://github.com/acme/registry.git",
            "scan_mode": "auto",
            "scan_roots": ["everyone"],
            "checkout_path": str(checkout),
        },
        "output": {"verbose": False, "colored": False},
    }
    path.write_text(yaml.dump(data), encoding="utf-8")
    monkeypatch.setenv("AGENTSYNC_CONFIG", str(path))
    return path


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, str]], Path]:
    """Expose write_files to tests."""
    return write_files
