# AgentSync Default Configuration
# Default configuration as Python dict and commented YAML template

from copy import deepcopy
from typing import Any

from agentsync.config.schema import DEFAULT_CHECKOUT_PATH, DEFAULT_SCAN_ROOTS

DEFAULT_CONFIG: dict[str, Any] = {
    "registry": {
        "remote_url": "",
        "scan_mode": "auto",
        "scan_roots": list(DEFAULT_SCAN_ROOTS),
        "checkout_path": DEFAULT_CHECKOUT_PATH,
        "strict_scan_roots": False,
        "auto_sync_enabled": True,
        "auto_sync_interval_minutes": 60,
        "enabled_community_skills": [],
    },
    "output": {
        "verbose": False,
        "colored": True,
        "log_file": None,
    },
}


def default_config() -> dict[str, Any]:
    """Return a fresh, mutable copy of DEFAULT_CONFIG."""
    return deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """
    Generate the default configuration file content.

    Returns:
        YAML text with explanatory comments.
    """
    return f"""\
# agentsync configuration
# Keeps ~/.claude, ~/.cursor, ~/.agents and ~/.config/opencode skills/rules
# in sync with a team registry on GitHub.

registry:
  # GitHub remote, HTTPS (https://github.com/org/repo.git)
  # or SSH (git@github.com:org/repo.git)
  remote_url: ""

  # auto:     sync every team folder found in the registry
  # explicit: sync only the folders listed in scan_roots
  scan_mode: auto
  scan_roots:
{chr(10).join(f"    - {root}" for root in DEFAULT_SCAN_ROOTS)}

  # Local working copy of the registry (branch: main)
  checkout_path: {DEFAULT_CHECKOUT_PATH}

  # true: a missing scan root fails the sync instead of being skipped
  strict_scan_roots: false

  auto_sync_enabled: true
  auto_sync_interval_minutes: 60
  enabled_community_skills: []

output:
  verbose: false
  colored: true
  # log_file: ~/.local/state/agentsync/sync.log
"""
