# AgentSync Manifest
# Mapping records and discovery of skills/rules directories in the checkout

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from agentsync.exceptions import AgentSyncError
from agentsync.logger import LogCallback, LogLevel
from agentsync.sync.layout import (
    CONTENT_DIR_NAMES,
    PLAYGROUND_DIR,
    RegistryLayout,
    destinations_for,
    detect_layout,
)
from agentsync.utils.paths import iter_subdirectories, relative_posix

MANIFEST_VERSION = 2


def _raw_value(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class MappingKind(str, Enum):
    """Whether a mapping copies a single file or a directory tree."""

    FILE = "file"
    DIRECTORY = "directory"


class MappingStrategy(str, Enum):
    """How a mapping is written into its destination."""

    REPLACE = "replace"
    MERGE = "merge"


class NoMappingsError(AgentSyncError):
    """Discovery found nothing to sync."""

    def __init__(self, scan_roots: Optional[list[str]] = None):
        self.scan_roots = list(scan_roots or [])
        super().__init__(
            "Scan found no skills/ or rules/ directories under the configured scan roots.",
            scan_roots=self.scan_roots,
        )


class ScanRootMissingError(AgentSyncError):
    """A selected scan root is not present in the checkout."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Configured scan root does not exist in checkout: {path}", path=str(path))


@dataclass(frozen=True)
class MappingItem:
    """One source directory (or file) copied to one home-relative destination."""

    source: str
    destination: str
    kind: MappingKind = MappingKind.DIRECTORY
    strategy: MappingStrategy = MappingStrategy.MERGE

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.destination)

    def to_dict(self) -> dict[str, str]:
        return {
            "source": self.source,
            "destination": self.destination,
            "kind": _raw_value(self.kind),
            "strategy": _raw_value(self.strategy),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MappingItem":
        return cls(
            source=data["source"],
            destination=data["destination"],
            # kind and strategy are validated when applied
            kind=data.get("kind", MappingKind.DIRECTORY.value),
            strategy=data.get("strategy", MappingStrategy.MERGE.value),
        )


@dataclass
class Manifest:
    """Ordered, de-duplicated set of mappings for one run."""

    mappings: list[MappingItem] = field(default_factory=list)
    version: int = MANIFEST_VERSION

    def __len__(self) -> int:
        return len(self.mappings)

    @property
    def sources(self) -> list[str]:
        """Distinct sources in discovery order."""
        return list(dict.fromkeys(m.source for m in self.mappings))

    def to_dict(self) -> dict[str, Any]:
        return {"version": self.version, "mappings": [m.to_dict() for m in self.mappings]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Manifest":
        return cls(
            mappings=[MappingItem.from_dict(m) for m in data.get("mappings", [])],
            version=data.get("version", MANIFEST_VERSION),
        )


def dedupe_mappings(mappings: list[MappingItem]) -> list[MappingItem]:
    """Drop repeated (source, destination) pairs, keeping the first."""
    seen: set[tuple[str, str]] = set()
    result: list[MappingItem] = []
    for mapping in mappings:
        if mapping.key in seen:
            continue
        seen.add(mapping.key)
        result.append(mapping)
    return result


def scan_for_content(directory: Path, checkout_root: Path, layout: RegistryLayout) -> list[MappingItem]:
    """
    Walk directory for skills/, skills-cursor/ and rules/ folders.

    Content folders become merge mappings and are not descended into.
    playground/ folders are opt-in content and are skipped.
    """
    results: list[MappingItem] = []

    for child in iter_subdirectories(directory):
        name = child.name
        source = relative_posix(child, checkout_root)
        if source is None:
            # Symlinked out of the checkout
            continue
        if name in CONTENT_DIR_NAMES:
            for destination in destinations_for(source, name, layout):
                results.append(MappingItem(source=source, destination=destination))
        elif name == PLAYGROUND_DIR:
            continue
        else:
            results.extend(scan_for_content(child, checkout_root, layout))

    return results


def discover_mappings(
    checkout_root: Path,
    scan_roots: list[str],
    logger: LogCallback,
    layout: Optional[RegistryLayout] = None,
    strict: bool = False,
) -> Manifest:
    """
    Build the manifest for the selected scan roots.

    Args:
        checkout_root: Registry checkout directory.
        scan_roots: Roots chosen by the planner ("." for the whole checkout).
        logger: Logging callback.
        layout: Detected layout; detected here when not given.
        strict: Raise on a missing scan root instead of skipping it.

    Returns:
        Manifest with at least one mapping.

    Raises:
        ScanRootMissingError: If strict and a scan root is missing.
        NoMappingsError: If no content directory was found.
    """
    if layout is None:
        layout = detect_layout(checkout_root)
    if layout == RegistryLayout.LEGACY_SHARED_GLOBAL:
        logger(LogLevel.WARN, "Detected legacy shared-global layout; applying compatibility mapping rules.")

    mappings: list[MappingItem] = []
    for root in scan_roots:
        root_path = checkout_root / root
        if not root_path.exists() or relative_posix(root_path, checkout_root) is None:
            if strict:
                raise ScanRootMissingError(root_path)
            logger(LogLevel.WARN, f"Skipping missing scan root: {root_path}")
            continue

        logger(LogLevel.INFO, f"Scanning {root}/ for skills and rules directories")
        mappings.extend(scan_for_content(root_path, checkout_root, layout))

    mappings = dedupe_mappings(mappings)
    if not mappings:
        raise NoMappingsError(scan_roots)

    for mapping in mappings:
        logger(LogLevel.INFO, f"  discovered: {mapping.source} -> ~/{mapping.destination}")

    return Manifest(mappings=mappings)
