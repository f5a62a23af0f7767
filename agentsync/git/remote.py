# AgentSync Remote URL Rules
# Recognized GitHub remote shapes

GITHUB_HOST = "github.com"

SUPPORTED_REMOTE_PREFIXES: tuple[str, ...] = (
    f"git@{GITHUB_HOST}:",
    f"ssh://git@{GITHUB_HOST}/",
    f"https://{GITHUB_HOST}/",
)


def is_supported_remote(url: str) -> bool:
    """
    Check whether url is an HTTPS or SSH GitHub remote.

    Args:
        url: Remote URL as entered by the user.

    Returns:
        True for git@github.com:..., ssh://git@github.com/... or https://github.com/...
    """
    lower = url.strip().lower()
    return any(lower.startswith(prefix) for prefix in SUPPORTED_REMOTE_PREFIXES)


def is_https_remote(url: str) -> bool:
    """Check whether url uses HTTPS transport."""
    return url.strip().lower().startswith("https://")
