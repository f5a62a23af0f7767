# AgentSync Run Lock
# Serialize sync runs that share a checkout

import fcntl
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from agentsync.exceptions import AgentSyncError
from agentsync.utils.paths import ensure_dir, expand_path


class SyncInProgressError(AgentSyncError):
    """Another run holds the checkout lock."""

    def __init__(self, lock_path: Path):
        self.lock_path = lock_path
        super().__init__(
            f"Another sync is already running for this checkout (lock: {lock_path})",
            lock_path=str(lock_path),
        )


def lock_path_for(checkout_path: str | Path) -> Path:
    """Lock file sitting next to the checkout directory."""
    checkout = expand_path(checkout_path)
    return checkout.with_name(f"{checkout.name}.lock")


@contextmanager
def sync_lock(checkout_path: str | Path) -> Iterator[Path]:
    """
    Hold an exclusive, non-blocking lock for the duration of a run.

    Raises:
        SyncInProgressError: If the lock is already held.
    """
    lock_path = lock_path_for(checkout_path)
    ensure_dir(lock_path.parent)
    with open(lock_path, "w") as lock_fd:
        try:
            fcntl.flock(lock_fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            raise SyncInProgressError(lock_path) from None
        try:
            yield lock_path
        finally:
            fcntl.flock(lock_fd, fcntl.LOCK_UN)
