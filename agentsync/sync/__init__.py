# AgentSync Sync Module
# Planning, mapping discovery and application of registry content

from agentsync.sync.apply import (
    ApplyFailedError,
    ApplySummary,
    DestinationEscapesHomeError,
    DestinationOutsideAllowedScopesError,
    SourceMissingError,
    UnsupportedStrategyError,
    apply_manifest,
    ensure_destination_allowed,
)
from agentsync.sync.engine import SyncSummary, build_manifest, run_sync
from agentsync.sync.layout import ALLOWED_PREFIXES, RegistryLayout, detect_layout
from agentsync.sync.manifest import (
    Manifest,
    MappingItem,
    MappingKind,
    MappingStrategy,
    NoMappingsError,
    ScanRootMissingError,
    discover_mappings,
)
from agentsync.sync.planner import NoUsableScanRootsError, SyncPlan, plan_scan_roots
from agentsync.sync.teams import TeamInfo, discover_teams

__all__ = [
    # Teams
    "TeamInfo",
    "discover_teams",
    # Layout
    "RegistryLayout",
    "detect_layout",
    "ALLOWED_PREFIXES",
    # Planner
    "SyncPlan",
    "plan_scan_roots",
    "NoUsableScanRootsError",
    # Manifest
    "Manifest",
    "MappingItem",
    "MappingKind",
    "MappingStrategy",
    "discover_mappings",
    "NoMappingsError",
    "ScanRootMissingError",
    # Apply
    "ApplySummary",
    "apply_manifest",
    "ensure_destination_allowed",
    "SourceMissingError",
    "DestinationEscapesHomeError",
    "DestinationOutsideAllowedScopesError",
    "UnsupportedStrategyError",
    "ApplyFailedError",
    # Engine
    "SyncSummary",
    "run_sync",
    "build_manifest",
]
