# AgentSync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from agentsync.config.defaults import DEFAULT_CONFIG, generate_default_config
from agentsync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    migrate_scan_roots,
    save_config,
    update_registry_setting,
    validate_config_file,
)
from agentsync.config.schema import (
    DEFAULT_SCAN_ROOTS,
    AgentSyncConfig,
    OutputConfig,
    ScanMode,
    Settings,
)

__all__ = [
    # Schema
    "AgentSyncConfig",
    "Settings",
    "OutputConfig",
    "ScanMode",
    "DEFAULT_SCAN_ROOTS",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    "update_registry_setting",
    "migrate_scan_roots",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
