# AgentSync Git Failure Classification
# Maps raw git output to remediation-oriented messages

from dataclasses import dataclass

DETAIL_LIMIT = 200


@dataclass(frozen=True)
class GitFailure:
    """One known git failure: substrings to look for and what to tell the user."""

    kind: str
    needles: tuple[str, ...]
    message: str


# First match wins; needles are lowercase.
GIT_FAILURES: tuple[GitFailure, ...] = (
    # HTTPS credentials
    GitFailure(
        "credentials_missing",
        ("could not read username",),
        "Git credentials not configured. Run `gh auth login && gh auth setup-git`, then sync again.",
    ),
    GitFailure(
        "auth_failed",
        ("authentication failed",),
        "GitHub auth expired or rejected. Run `gh auth login && gh auth setup-git` to re-authenticate.",
    ),
    GitFailure(
        "access_denied",
        ("returned error: 403", "returned error: 401"),
        "Access denied: GitHub rejected your credentials. Re-authenticate with `gh auth login && gh auth setup-git`.",
    ),
    # SSH
    GitFailure(
        "ssh_publickey",
        ("permission denied (publickey)",),
        "GitHub SSH auth failed. Run `agentsync check` and ensure your SSH key has repo access.",
    ),
    GitFailure(
        "host_key",
        ("host key verification failed",),
        "SSH host key verification failed. Run: ssh-keyscan github.com >> ~/.ssh/known_hosts",
    ),
    GitFailure(
        "ssh_no_identity",
        ("no such identity", "no identities"),
        "No SSH key found. Add your key with: ssh-add ~/.ssh/<your-key>",
    ),
    # Network
    GitFailure(
        "dns",
        ("could not resolve hostname", "could not resolve host"),
        "Cannot reach GitHub. Check your internet connection.",
    ),
    GitFailure(
        "connection_refused",
        ("connection refused",),
        "Connection refused by GitHub. Check your network or firewall settings.",
    ),
    GitFailure(
        "connection_timeout",
        ("connection timed out",),
        "Connection to GitHub timed out. Check your internet connection.",
    ),
    # Repository / branch
    GitFailure(
        "repo_not_found",
        ("repository not found",),
        "Repository not found or access denied. Verify your GitHub URL and org permissions.",
    ),
    GitFailure(
        "branch_not_found",
        ("couldn't find remote ref",),
        "Branch not found in repository. Check that the 'main' branch exists.",
    ),
    GitFailure(
        "corrupt_checkout",
        ("not a git repository",),
        "Local checkout is corrupt. Delete the checkout folder and sync again.",
    ),
    GitFailure(
        "unable_to_access",
        ("unable to access",),
        "Cannot access repository. Check your URL and credentials.",
    ),
)


def truncate_detail(raw: str, limit: int = DETAIL_LIMIT) -> str:
    """Cut raw tool output down to limit characters, marking the cut."""
    return raw if len(raw) <= limit else raw[:limit] + "…"


def match_git_failure(raw: str) -> GitFailure | None:
    """Return the first known failure whose needle appears in raw output."""
    lower = raw.lower()
    for failure in GIT_FAILURES:
        if any(needle in lower for needle in failure.needles):
            return failure
    return None


def classify_git_output(raw: str) -> tuple[str, str]:
    """
    Turn raw git output into a user-facing message.

    Args:
        raw: stderr/stdout text from a failed git command.

    Returns:
        Tuple of (kind, message). Unknown output yields kind "unknown" and a
        generic message with the truncated raw detail appended.
    """
    failure = match_git_failure(raw)
    if failure is not None:
        return failure.kind, failure.message

    detail = truncate_detail(raw.strip())
    return "unknown", f"Git error. Run `agentsync check` for diagnostics.\n\nDetail: {detail}"
