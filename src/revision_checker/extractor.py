"""
Revision extraction from the tracked file, at the tip and across history.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from enum import Enum

from ..shared_utilities import get_logger, trace_operation
from .data_models import HistoricalCommitRecord, TipRevision
from .errors import ExtractionError, GitCommandError, HistoryError
from .git_client import GitClient
from .revision_parser import find_value


class UnextractableCommitPolicy(str, Enum):
    """What the window scan does with a commit whose value cannot be read."""

    # Older revisions of the file may predate the key, so they are dropped
    SKIP = "skip"
    RAISE = "raise"


class TipRevisionExtractor:
    """Reads the tracked file on the current checkout."""

    def __init__(self, client: GitClient, revision_key: str):
        self.client = client
        self.revision_key = revision_key
        self.logger = get_logger(__name__)

    def read_value(self, file_path: str) -> str:
        """
        Extract the revision value from the working-copy file.

        Raises:
            ExtractionError: If the file cannot be read or lacks the key
        """
        path = self.client.working_dir / file_path
        try:
            content = path.read_bytes().decode("utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise ExtractionError(file_path, str(e)) from e

        value = find_value(content, self.revision_key)
        if value is None:
            raise ExtractionError(file_path, f"{self.revision_key} not found")
        return value

    def extract(self, file_path: str) -> TipRevision:
        """
        Extract the tip value and the date of the last commit touching the file.

        Raises:
            ExtractionError: If the value cannot be extracted
            HistoryError: If no commit touched the file
        """
        with trace_operation("extract_tip", {"file": file_path}):
            value = self.read_value(file_path)

            try:
                commit_date = self.client.last_commit_date(file_path)
            except GitCommandError as e:
                raise HistoryError(file_path, str(e)) from e
            if commit_date is None:
                raise HistoryError(file_path, "no commit touched the file")

        return TipRevision(value=value, commit_date=commit_date)

    def lookup_commit_id(self, file_path: str) -> str | None:
        """Hash of the tip commit, or None when it cannot be determined."""
        try:
            return self.client.last_commit_id(file_path)
        except GitCommandError as e:
            self.logger.warning(f"Could not determine tip commit of {file_path}: {e}")
            return None


class HistoricalWindowScanner:
    """Recovers the tracked value at every commit inside a day-count window."""

    def __init__(
        self,
        client: GitClient,
        revision_key: str,
        policy: UnextractableCommitPolicy = UnextractableCommitPolicy.SKIP,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize history scanner.

        Args:
            client: Git client bound to the working copy
            revision_key: Key to extract at each commit
            policy: Handling of commits whose value cannot be extracted
            clock: Returns the current aware datetime, defaults to UTC now
        """
        self.client = client
        self.revision_key = revision_key
        self.policy = policy
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.logger = get_logger(__name__)

    def window_start(self, days: int) -> datetime | None:
        """Start of the window, or None when it reaches past the earliest date."""
        try:
            return self.clock() - timedelta(days=days)
        except OverflowError:
            return None

    def scan(self, file_path: str, days: int) -> list[HistoricalCommitRecord]:
        """
        List values of the file for commits made in the last ``days`` days.

        Order is git's reverse-chronological log order; ties keep log order.
        Content is read as of each commit, not from the working copy.

        Raises:
            ValueError: If days is not positive
            HistoryError: If the log query fails
        """
        if days < 1:
            raise ValueError(f"days must be positive, got {days}")

        since = self.window_start(days)
        with trace_operation(
            "scan_history", {"file": file_path, "days": days}
        ) as span:
            try:
                commits = self.client.commits_since(file_path, since)
            except GitCommandError as e:
                raise HistoryError(file_path, str(e)) from e

            records = []
            for commit_id, commit_date in commits:
                value = self._value_at(commit_id, file_path)
                if value is None:
                    continue
                records.append(
                    HistoricalCommitRecord(
                        commit_id=commit_id, commit_date=commit_date, value=value
                    )
                )

            if span is not None:
                span.set_attribute("commits", len(commits))
                span.set_attribute("records", len(records))

        window = f"since {since:%Y-%m-%d %H:%M:%S}" if since else "in all history"
        self.logger.debug(
            f"Scanned {len(commits)} commits of {file_path} {window}, "
            f"kept {len(records)}"
        )
        return records

    def _value_at(self, commit_id: str, file_path: str) -> str | None:
        try:
            content = self.client.show_file(commit_id, file_path)
        except GitCommandError as e:
            return self._unextractable(commit_id, file_path, str(e))

        value = find_value(content, self.revision_key)
        if value is None:
            return self._unextractable(
                commit_id, file_path, f"{self.revision_key} not found"
            )
        return value

    def _unextractable(self, commit_id: str, file_path: str, reason: str) -> None:
        if self.policy is UnextractableCommitPolicy.RAISE:
            raise ExtractionError(f"{commit_id}:{file_path}", reason)
        self.logger.debug(f"Skipping commit {commit_id[:12]}: {reason}")
        return None
