# AgentSync Team Discovery
# Find team folders at the top of a registry checkout

from dataclasses import dataclass
from pathlib import Path

import yaml

from agentsync.sync.layout import MODERN_GLOBAL_ROOT, PLAYGROUND_DIR, RULES_DIR, SKILLS_DIR
from agentsync.utils.paths import iter_subdirectories

TEAM_METADATA_FILE = "team.yaml"

# Shared opt-in content, never a scope of its own
RESERVED_FOLDERS: frozenset[str] = frozenset({"community-playground"})


@dataclass
class TeamInfo:
    """A team (scope) folder found in the registry."""

    folder_name: str
    display_name: str
    description: str = ""
    has_playground: bool = False

    @property
    def is_everyone(self) -> bool:
        return self.folder_name == MODERN_GLOBAL_ROOT


def default_display_name(folder_name: str) -> str:
    """Title-case a folder name word by word, keeping separators."""
    return folder_name.title()


def read_team_metadata(team_dir: Path) -> tuple[str, str]:
    """
    Read display name and description from team.yaml.

    Missing, unreadable or malformed metadata falls back to the title-cased
    folder name and an empty description.

    Returns:
        Tuple of (display_name, description).
    """
    display_name = default_display_name(team_dir.name)
    description = ""

    metadata_path = team_dir / TEAM_METADATA_FILE
    try:
        with open(metadata_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return display_name, description

    if not isinstance(data, dict):
        return display_name, description

    name = _clean_value(data.get("name"))
    if name:
        display_name = name
    description = _clean_value(data.get("description"))
    return display_name, description


def _clean_value(value: object) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    text = str(value).strip()
    # Strip one layer of wrapping quotes
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        text = text[1:-1].strip()
    return text


def discover_teams(checkout_root: Path) -> list[TeamInfo]:
    """
    List team folders in a registry checkout.

    A team folder is a visible top-level directory holding skills/ or rules/.
    The everyone scope sorts first, the rest alphabetically.

    Args:
        checkout_root: Registry checkout directory.

    Returns:
        Teams found; empty if the checkout is missing or unreadable.
    """
    teams: list[TeamInfo] = []

    for child in iter_subdirectories(checkout_root):
        if child.name in RESERVED_FOLDERS:
            continue
        if not ((child / SKILLS_DIR).exists() or (child / RULES_DIR).exists()):
            continue

        display_name, description = read_team_metadata(child)
        teams.append(
            TeamInfo(
                folder_name=child.name,
                display_name=display_name,
                description=description,
                has_playground=(child / PLAYGROUND_DIR / SKILLS_DIR).exists(),
            )
        )

    teams.sort(key=lambda t: (not t.is_everyone, t.folder_name))
    return teams
