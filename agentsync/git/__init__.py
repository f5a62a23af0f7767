# AgentSync Git Module
# Registry checkout management and setup diagnostics

from agentsync.git.diagnostics import (
    AccessProbe,
    SetupCheckResult,
    probe_remote_access,
    run_setup_check,
    suggest_auth_fix,
)
from agentsync.git.messages import GIT_FAILURES, classify_git_output
from agentsync.git.operations import (
    FIXED_BRANCH,
    CheckoutMissingGitDirError,
    CloneFailedError,
    GitError,
    UnsupportedRemoteError,
    prepare_registry,
)
from agentsync.git.remote import is_https_remote, is_supported_remote

__all__ = [
    "FIXED_BRANCH",
    "prepare_registry",
    "is_supported_remote",
    "is_https_remote",
    "classify_git_output",
    "GIT_FAILURES",
    # Errors
    "GitError",
    "CloneFailedError",
    "UnsupportedRemoteError",
    "CheckoutMissingGitDirError",
    # Diagnostics
    "AccessProbe",
    "SetupCheckResult",
    "probe_remote_access",
    "run_setup_check",
    "suggest_auth_fix",
]
