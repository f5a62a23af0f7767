# AgentSync Configuration Loader
# Load, save, and migrate YAML configuration files

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from agentsync.config.defaults import default_config, generate_default_config
from agentsync.config.schema import AgentSyncConfig, Settings
from agentsync.sync.layout import LEGACY_GLOBAL_ROOT, MODERN_GLOBAL_ROOT, normalize_roots

LIST_SETTINGS = ("scan_roots", "enabled_community_skills")


def get_config_dir() -> Path:
    """Get the agentsync configuration directory."""
    return Path.home() / ".config" / "agentsync"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    # Allow override via environment variable
    env_path = os.environ.get("AGENTSYNC_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> AgentSyncConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        AgentSyncConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config file is invalid.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\nRun 'agentsync config init' to create one."
        )

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    return AgentSyncConfig.model_validate(_merge_with_defaults(data))


def save_config(config: AgentSyncConfig, config_path: Optional[Path] = None) -> Path:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration object to save.
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Path: Path where config was saved.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    # mode='json' serializes Enums as their string values
    data = config.model_dump(exclude_none=True, mode="json")

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return config_path


def ensure_config_exists(config_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating default if needed.

    Returns:
        Tuple of (config_path, was_created).
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file without loading it into the system.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if data is None:
        return False, ["Configuration file is empty"]
    if not isinstance(data, dict):
        return False, ["Configuration root must be a mapping"]

    errors: list[str] = []
    try:
        AgentSyncConfig.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        return False, errors

    if "registry" not in data:
        errors.append("Missing 'registry' section")

    return len(errors) == 0, errors


def parse_setting_value(key: str, raw: str) -> Any:
    """
    Convert a command-line string into a setting value.

    List settings accept comma-separated names; everything else is read as
    a YAML scalar so "true", "30" and "explicit" get their natural types.
    """
    if key in LIST_SETTINGS:
        return [part.strip() for part in raw.split(",") if part.strip()]
    if key in ("remote_url", "checkout_path"):
        return raw
    return yaml.safe_load(raw)


def update_registry_setting(key: str, raw_value: str, config_path: Optional[Path] = None) -> AgentSyncConfig:
    """
    Update one registry setting and save.

    Args:
        key: Field name under the registry section.
        raw_value: New value as typed on the command line.
        config_path: Optional path to config file.

    Returns:
        Updated AgentSyncConfig.

    Raises:
        KeyError: If key is not a registry setting.
        ValidationError: If the new value is invalid.
    """
    if key not in Settings.model_fields:
        raise KeyError(f"Unknown registry setting '{key}'")

    config = load_config(config_path)
    data = config.model_dump(mode="json")
    data["registry"][key] = parse_setting_value(key, raw_value)

    updated = AgentSyncConfig.model_validate(data)
    save_config(updated, config_path)
    return updated


def migrate_scan_roots(settings: Settings) -> tuple[Settings, bool]:
    """
    Align configured scan roots with the global folder the checkout really has.

    Registries renamed their global scope folder between layouts. When only
    one of the two names exists in the checkout, configured roots using the
    other name are rewritten. Roots are then trimmed and de-duplicated.

    Returns:
        Tuple of (settings, changed).
    """
    checkout = Path(settings.checkout_path)
    has_modern = (checkout / MODERN_GLOBAL_ROOT).exists()
    has_legacy = (checkout / LEGACY_GLOBAL_ROOT).exists()

    roots = list(settings.scan_roots)
    if has_legacy and not has_modern:
        roots = [LEGACY_GLOBAL_ROOT if r == MODERN_GLOBAL_ROOT else r for r in roots]
    elif has_modern and not has_legacy:
        roots = [MODERN_GLOBAL_ROOT if r == LEGACY_GLOBAL_ROOT else r for r in roots]

    roots = normalize_roots(roots)
    if roots == settings.scan_roots:
        return settings, False
    return settings.model_copy(update={"scan_roots": roots}), True


def _merge_with_defaults(data: dict) -> dict:
    """Merge loaded data with default values for missing keys."""
    result = default_config()

    for section in ("registry", "output"):
        if isinstance(data.get(section), dict):
            result[section] = {**result[section], **data[section]}

    return result
