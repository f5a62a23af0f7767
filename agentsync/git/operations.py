# AgentSync Git Operations
# Clone / fast-forward of the registry checkout through the git CLI

from pathlib import Path
from typing import Optional

from agentsync.exceptions import AgentSyncError
from agentsync.git.messages import classify_git_output
from agentsync.git.remote import is_supported_remote
from agentsync.logger import LogCallback, LogLevel, null_logger
from agentsync.utils.paths import ensure_dir, expand_path
from agentsync.utils.process import CommandResult, run_command

GIT_EXECUTABLE = "git"
FIXED_BRANCH = "main"
DEFAULT_REMOTE = "origin"

# Never let git block on an interactive credential prompt.
NON_INTERACTIVE_ENV = {"GIT_TERMINAL_PROMPT": "0"}


class UnsupportedRemoteError(AgentSyncError):
    """Remote URL is not an HTTPS or SSH GitHub URL."""

    def __init__(self, remote: str):
        self.remote = remote
        if remote:
            message = f"Only GitHub remotes (HTTPS or SSH) are supported. Invalid remote: {remote}"
        else:
            message = "No remote configured. Set registry.remote_url to a GitHub repository URL."
        super().__init__(message, remote=remote)


class CheckoutMissingGitDirError(AgentSyncError):
    """Checkout path exists but holds no git metadata."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Checkout path exists but is not a git repo: {path}", path=str(path))


class GitError(AgentSyncError):
    """A git command ran and failed while syncing the checkout."""

    label = "Git sync failed"

    def __init__(
        self,
        reason: str,
        *,
        returncode: int = 1,
        stderr: str = "",
        failure_kind: str = "unknown",
    ):
        self.reason = reason
        self.returncode = returncode
        self.stderr = stderr
        self.failure_kind = failure_kind
        super().__init__(
            f"{self.label}: {reason}",
            returncode=returncode,
            stderr=stderr,
            failure_kind=failure_kind,
        )


class CloneFailedError(GitError):
    """The initial clone of the registry failed."""

    label = "Git clone failed"

    @classmethod
    def from_git_error(cls, error: GitError) -> "CloneFailedError":
        return cls(
            error.reason,
            returncode=error.returncode,
            stderr=error.stderr,
            failure_kind=error.failure_kind,
        )


def _run_git(
    *args: str,
    cwd: Optional[Path] = None,
    check: bool = True,
    extra_env: Optional[dict[str, str]] = None,
) -> CommandResult:
    """
    Run a git command.

    Args:
        *args: Git command arguments.
        cwd: Working directory.
        check: Whether to raise on non-zero exit.
        extra_env: Extra environment variables for this call.

    Returns:
        CommandResult with captured output.

    Raises:
        GitError: If the command fails and check is True.
        CommandLaunchError: If git could not be started.
    """
    env = dict(NON_INTERACTIVE_ENV)
    if extra_env:
        env.update(extra_env)

    result = run_command(GIT_EXECUTABLE, args, cwd=cwd, extra_env=env)
    if check and not result.ok:
        raw = result.stderr.strip() or result.stdout.strip()
        if raw:
            failure_kind, reason = classify_git_output(raw)
        else:
            failure_kind, reason = "unknown", f"git {args[0]} exited with status {result.exit_code}"
        raise GitError(
            reason,
            returncode=result.exit_code,
            stderr=raw,
            failure_kind=failure_kind,
        )
    return result


def has_git_metadata(path: Path) -> bool:
    """Check whether path carries a .git directory (or gitdir file)."""
    return (path / ".git").exists()


def clone_repo(url: str, dest: Path, *, branch: str = FIXED_BRANCH) -> None:
    """
    Clone url at branch directly into dest.

    Raises:
        GitError: If the clone fails.
    """
    _run_git("clone", "--branch", branch, url, str(dest))


def fetch(path: Path, *, remote: str = DEFAULT_REMOTE, prune: bool = True) -> None:
    """Fetch remote refs, pruning deleted branches."""
    args = ["fetch"]
    if prune:
        args.append("--prune")
    args.append(remote)
    _run_git(*args, cwd=path)


def checkout_branch(path: Path, branch: str = FIXED_BRANCH) -> None:
    """Switch the working copy to branch."""
    _run_git("checkout", branch, cwd=path)


def pull_ff_only(path: Path, *, remote: str = DEFAULT_REMOTE, branch: str = FIXED_BRANCH) -> None:
    """Fast-forward branch from remote; local divergence is an error."""
    _run_git("pull", "--ff-only", remote, branch, cwd=path)


def ls_remote(url: str, ref: str = "HEAD", *, extra_env: Optional[dict[str, str]] = None) -> CommandResult:
    """Probe a remote ref without raising on failure."""
    return _run_git("ls-remote", url, ref, check=False, extra_env=extra_env)


def get_global_config(key: str) -> Optional[str]:
    """Read a value from the user's global git config, or None if unset."""
    result = _run_git("config", "--global", key, check=False)
    value = result.stdout.strip()
    return value if result.ok and value else None


def prepare_registry(
    remote_url: str,
    checkout_path: str | Path,
    logger: LogCallback = null_logger,
) -> Path:
    """
    Make checkout_path an up-to-date working copy of remote_url's main branch.

    Clones on first use. Afterwards fetches with pruning, switches to the
    fixed branch and fast-forwards it. A directory without git metadata is
    never re-cloned over.

    Args:
        remote_url: GitHub remote (HTTPS or SSH).
        checkout_path: Local checkout directory (~ is expanded).
        logger: Logging callback.

    Returns:
        Absolute path of the checkout.

    Raises:
        UnsupportedRemoteError: If remote_url is not a GitHub remote.
        CheckoutMissingGitDirError: If checkout_path exists without .git.
        CloneFailedError: If the initial clone fails.
        GitError: If fetch, checkout or pull fails.
        CommandLaunchError: If git cannot be started.
    """
    remote = remote_url.strip()
    if not is_supported_remote(remote):
        raise UnsupportedRemoteError(remote)

    checkout = expand_path(checkout_path)

    if checkout.exists():
        if not has_git_metadata(checkout):
            raise CheckoutMissingGitDirError(checkout)

        logger(LogLevel.INFO, f"Fetching latest from {remote} [branch: {FIXED_BRANCH}]")
        fetch(checkout)
        checkout_branch(checkout)
        pull_ff_only(checkout)
    else:
        logger(LogLevel.INFO, f"Cloning config repo from {remote} [branch: {FIXED_BRANCH}]")
        ensure_dir(checkout.parent)
        try:
            clone_repo(remote, checkout)
        except GitError as e:
            raise CloneFailedError.from_git_error(e) from e

    return checkout
