"""AgentSync - team registry sync for agent skills and rules.

Pulls a GitHub registry repository and merges its skills/ and rules/
folders into ~/.agents, ~/.claude, ~/.cursor and ~/.config/opencode.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "AgentSyncError",
    "Settings",
    "ScanMode",
    "run_sync",
    "SyncSummary",
    "discover_teams",
    "TeamInfo",
    "plan_scan_roots",
    "discover_mappings",
    "apply_manifest",
    "prepare_registry",
    "LogLevel",
    "SyncLogger",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name == "AgentSyncError":
        from agentsync.exceptions import AgentSyncError

        return AgentSyncError
    if name in ("Settings", "ScanMode"):
        from agentsync.config import schema

        return getattr(schema, name)
    if name in ("LogLevel", "SyncLogger"):
        from agentsync import logger

        return getattr(logger, name)
    if name == "prepare_registry":
        from agentsync.git.operations import prepare_registry

        return prepare_registry
    if name in (
        "run_sync",
        "SyncSummary",
        "discover_teams",
        "TeamInfo",
        "plan_scan_roots",
        "discover_mappings",
        "apply_manifest",
    ):
        from agentsync import sync

        return getattr(sync, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
