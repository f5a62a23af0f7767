# AgentSync Setup Diagnostics
# Remote, credential and SSH checks via git, ssh and the GitHub CLI

import os
import shutil
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from agentsync.git.operations import FIXED_BRANCH, get_global_config, ls_remote
from agentsync.git.remote import GITHUB_HOST, is_https_remote, is_supported_remote
from agentsync.utils.process import CommandLaunchError, run_command

# Locations GUI launchers and minimal shells often leave off PATH
GH_CANDIDATES = ("/opt/homebrew/bin/gh", "/usr/local/bin/gh")

SSH_BATCH_ENV = {"GIT_SSH_COMMAND": "ssh -o BatchMode=yes"}

AUTH_ERROR_NEEDLES = (
    "could not read username",
    "authentication failed",
    "permission denied",
    "returned error: 401",
    "returned error: 403",
    "no such identity",
    "no identities",
)


@dataclass
class SetupCheckResult:
    """Outcome of a setup check: pass/fail plus one line per finding."""

    passed: bool
    lines: list[str] = field(default_factory=list)
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class AccessProbe:
    """
    Result of probing a remote with ``git ls-remote``.

    ``ok`` is None when git could not be run, so the outcome is unknown.
    """

    ok: Optional[bool]
    auth_error: bool = False
    detail: str = ""


def _batch_env(remote_url: str) -> dict[str, str]:
    return {} if is_https_remote(remote_url) else dict(SSH_BATCH_ENV)


def find_gh() -> Optional[str]:
    """Locate the GitHub CLI executable, or None if it is not installed."""
    for candidate in GH_CANDIDATES:
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return candidate
    return shutil.which("gh")


def gh_is_authenticated() -> bool:
    """Check ``gh auth status``."""
    gh = find_gh()
    if gh is None:
        return False
    try:
        return run_command(gh, ["auth", "status"]).ok
    except CommandLaunchError:
        return False


def gh_current_user() -> Optional[str]:
    """Return the login gh is authenticated as, or None."""
    gh = find_gh()
    if gh is None:
        return None
    try:
        result = run_command(gh, ["api", "user", "--jq", ".login"])
    except CommandLaunchError:
        return None
    login = result.stdout.strip()
    return login if result.ok and login else None


def suggest_auth_fix() -> str:
    """Shell command that sets up HTTPS git credentials through gh."""
    fix = "gh auth login --web -p https && gh auth setup-git"
    if find_gh() is None:
        return f"brew install gh && {fix}"
    return fix


def probe_remote_access(remote_url: str) -> AccessProbe:
    """
    Probe remote_url with ``git ls-remote <remote> HEAD``.

    Args:
        remote_url: Remote to probe.

    Returns:
        AccessProbe telling whether access works and whether a failure
        looks like a credentials problem.
    """
    remote = remote_url.strip()
    try:
        result = ls_remote(remote, "HEAD", extra_env=_batch_env(remote))
    except CommandLaunchError as e:
        return AccessProbe(ok=None, detail=str(e))

    if result.ok:
        return AccessProbe(ok=True)

    combined = result.combined.lower()
    auth_error = any(needle in combined for needle in AUTH_ERROR_NEEDLES)
    return AccessProbe(ok=False, auth_error=auth_error, detail=result.combined.strip())


def _check_ssh(lines: list[str]) -> bool:
    passed = True

    try:
        keys = run_command("ssh-add", ["-l"])
        output = keys.combined.lower()
        if keys.ok and "no identities" not in output:
            lines.append("SSH agent has at least one loaded key.")
        else:
            passed = False
            lines.append("No keys loaded in ssh-agent. Run: ssh-add ~/.ssh/<your-key>")
    except CommandLaunchError:
        passed = False
        lines.append("Could not run ssh-add. Ensure OpenSSH tools are installed.")

    try:
        ssh = run_command("ssh", ["-T", "-o", "BatchMode=yes", f"git@{GITHUB_HOST}"])
        output = ssh.combined.lower()
        if "successfully authenticated" in output:
            lines.append("GitHub SSH authentication works.")
        else:
            passed = False
            if "permission denied" in output:
                lines.append("GitHub rejected your SSH key. Add the key to your GitHub account/org.")
            else:
                lines.append(f"Could not verify GitHub SSH auth. Run: ssh -T git@{GITHUB_HOST}")
    except CommandLaunchError:
        passed = False
        lines.append(f"Could not run ssh auth check against {GITHUB_HOST}.")

    return passed


def _check_branch_access(remote: str, lines: list[str]) -> bool:
    try:
        result = ls_remote(remote, FIXED_BRANCH, extra_env=_batch_env(remote))
    except CommandLaunchError:
        lines.append("Could not run git ls-remote check.")
        return False

    if result.ok:
        lines.append(f"Repository access OK for {FIXED_BRANCH} branch.")
        return True

    combined = result.combined.lower()
    if "repository not found" in combined:
        lines.append("Repo not found or you do not have access.")
    elif "permission denied" in combined or "authentication failed" in combined:
        lines.append("Authentication failed. Check your credentials.")
    else:
        lines.append(f"Could not read repo {FIXED_BRANCH} branch. Check URL and permissions.")
    return False


def run_setup_check(remote_url: str) -> SetupCheckResult:
    """
    Diagnose whether remote_url can be synced from this machine.

    Checks the URL shape, then transport-specific credentials (credential
    helper for HTTPS, ssh-agent keys and GitHub SSH auth for SSH), and
    finally read access to the fixed branch.

    Args:
        remote_url: Configured remote URL.

    Returns:
        SetupCheckResult with one human-readable line per check.
    """
    lines: list[str] = []
    passed = True
    remote = remote_url.strip()
    https = is_https_remote(remote)
    valid = bool(remote) and is_supported_remote(remote)

    if not remote:
        lines.append("Set registry.remote_url to your GitHub repo URL.")
        passed = False
    elif not valid:
        lines.append("Remote must be a GitHub URL (HTTPS or SSH).")
        passed = False
    else:
        lines.append(f"Remote format looks valid ({'HTTPS' if https else 'SSH'}).")

    if https:
        try:
            helper = get_global_config("credential.helper")
            if helper:
                lines.append(f"Git credential helper: {helper}")
            else:
                lines.append("No explicit credential helper (an OS keychain may provide credentials).")
        except CommandLaunchError:
            lines.append("Could not check credential helper configuration.")
        if gh_is_authenticated():
            user = gh_current_user()
            lines.append(f"GitHub CLI authenticated{f' as {user}' if user else ''}.")
    elif valid:
        passed = _check_ssh(lines) and passed

    if valid:
        passed = _check_branch_access(remote, lines) and passed

    return SetupCheckResult(passed=passed, lines=lines)
