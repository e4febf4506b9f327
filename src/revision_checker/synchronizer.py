"""
Brings the shared working copy onto a branch.

Checkout and reset mutate the single working copy every other component
reads from, so branches must be synchronized and processed one at a time.
"""

from ..shared_utilities import get_logger, trace_operation
from .config import SyncMode
from .errors import GitCommandError, SyncError
from .git_client import GitClient


class BranchSynchronizer:
    """Checks out branches, optionally hard-resetting them to the remote tip."""

    def __init__(self, client: GitClient, remote: str = "origin"):
        self.client = client
        self.remote = remote
        self.logger = get_logger(__name__)

    def synchronize(self, branch: str, mode: SyncMode) -> None:
        """
        Leave the working copy checked out on ``branch``.

        In fast-forward mode the remote is fetched and the branch is
        hard-reset to ``<remote>/<branch>`` after checkout. In as-is mode the
        branch is only checked out.

        Raises:
            SyncError: If fetch, checkout or reset fails
        """
        with trace_operation(
            "synchronize_branch", {"branch": branch, "mode": mode.value}
        ):
            if mode is SyncMode.FAST_FORWARD:
                self._step(
                    branch, f"fetch from {self.remote}", self.client.fetch, self.remote
                )

            self._step(branch, "checkout", self.client.checkout, branch)

            if mode is SyncMode.FAST_FORWARD:
                remote_ref = f"{self.remote}/{branch}"
                self._step(
                    branch, f"reset to {remote_ref}", self.client.reset_hard, remote_ref
                )

        self.logger.debug(f"Branch {branch} synchronized ({mode.value})")

    def _step(self, branch: str, description: str, action, *args) -> None:
        try:
            action(*args)
        except GitCommandError as e:
            raise SyncError(branch, f"{description} failed: {e}") from e
