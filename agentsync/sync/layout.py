# AgentSync Registry Layout
# Layout detection, root aliases and destination policy

from collections.abc import Iterable
from enum import Enum
from pathlib import Path

MODERN_GLOBAL_ROOT = "everyone"
LEGACY_GLOBAL_ROOT = "shared-global"

# Synthetic scan root meaning "the checkout itself"
CHECKOUT_ROOT = "."

SKILLS_DIR = "skills"
CURSOR_SKILLS_DIR = "skills-cursor"
RULES_DIR = "rules"
PLAYGROUND_DIR = "playground"
CONTENT_DIR_NAMES: frozenset[str] = frozenset({SKILLS_DIR, CURSOR_SKILLS_DIR, RULES_DIR})

CLAUDE_SKILLS = ".claude/skills"
CURSOR_SKILLS = ".cursor/skills"
CLAUDE_RULES = ".claude/rules"
CURSOR_RULES = ".cursor/rules"

SKILL_DESTINATIONS: tuple[str, ...] = (
    ".agents/skills",
    CLAUDE_SKILLS,
    CURSOR_SKILLS,
    ".config/opencode/skills",
)
RULE_DESTINATIONS: tuple[str, ...] = (CLAUDE_RULES, CURSOR_RULES)

# Home-relative prefixes a destination must fall under
ALLOWED_PREFIXES: tuple[str, ...] = (".agents", ".claude", ".cursor", ".config/opencode")

# Global scope folder was renamed between registry layouts
ROOT_ALIASES: dict[str, tuple[str, ...]] = {
    MODERN_GLOBAL_ROOT: (MODERN_GLOBAL_ROOT, LEGACY_GLOBAL_ROOT),
    LEGACY_GLOBAL_ROOT: (LEGACY_GLOBAL_ROOT, MODERN_GLOBAL_ROOT),
}


class RegistryLayout(str, Enum):
    """Shape of a registry checkout."""

    TEAM_BASED = "team_based"
    LEGACY_SHARED_GLOBAL = "legacy_shared_global"


def detect_layout(checkout_root: Path) -> RegistryLayout:
    """
    Detect whether the checkout still uses the shared-global layout.

    The legacy layout keeps tool-specific folders under shared-global/,
    e.g. shared-global/claude/skills.
    """
    legacy_root = checkout_root / LEGACY_GLOBAL_ROOT
    if (legacy_root / "claude").exists() or (legacy_root / "cursor").exists():
        return RegistryLayout.LEGACY_SHARED_GLOBAL
    return RegistryLayout.TEAM_BASED


def normalize_roots(roots: Iterable[str]) -> list[str]:
    """Trim root names, drop empty ones and de-duplicate preserving order."""
    seen: set[str] = set()
    result: list[str] = []
    for root in roots:
        name = root.strip()
        if name and name not in seen:
            seen.add(name)
            result.append(name)
    return result


def root_candidates(root: str) -> tuple[str, ...]:
    """Folder names to try, in order, for a requested scan root."""
    return ROOT_ALIASES.get(root, (root,))


def destinations_for(source: str, content_dir: str, layout: RegistryLayout) -> tuple[str, ...]:
    """
    Home-relative destinations for a discovered content directory.

    Args:
        source: Checkout-relative source path (forward slashes).
        content_dir: One of CONTENT_DIR_NAMES.
        layout: Detected registry layout.

    Returns:
        Destination paths, empty for an unknown content_dir.
    """
    if content_dir == CURSOR_SKILLS_DIR:
        return (CURSOR_SKILLS,)
    if content_dir == SKILLS_DIR:
        full, claude_only, cursor_only = SKILL_DESTINATIONS, CLAUDE_SKILLS, CURSOR_SKILLS
    elif content_dir == RULES_DIR:
        full, claude_only, cursor_only = RULE_DESTINATIONS, CLAUDE_RULES, CURSOR_RULES
    else:
        return ()

    if layout == RegistryLayout.LEGACY_SHARED_GLOBAL:
        segments = set(source.split("/"))
        if "claude" in segments:
            return (claude_only,)
        if "cursor" in segments:
            return (cursor_only,)
    return full
