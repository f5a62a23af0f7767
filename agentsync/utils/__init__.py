# AgentSync Utilities Module
# Process execution and filesystem helpers

from agentsync.utils.paths import (
    IGNORED_NAMES,
    copy_file,
    ensure_dir,
    expand_path,
    is_within,
    iter_subdirectories,
    merge_directory,
    relative_posix,
    remove_path,
    replace_path,
)
from agentsync.utils.process import CommandLaunchError, CommandResult, run_command

__all__ = [
    # Process
    "CommandLaunchError",
    "CommandResult",
    "run_command",
    # Paths
    "IGNORED_NAMES",
    "copy_file",
    "ensure_dir",
    "expand_path",
    "is_within",
    "iter_subdirectories",
    "merge_directory",
    "relative_posix",
    "remove_path",
    "replace_path",
]
