"""
Core revision checking across environment branches.
"""

from collections.abc import Callable
from datetime import datetime
from enum import Enum
from pathlib import Path

from ..shared_utilities import get_logger, trace_function, trace_operation
from .config import (
    BRANCH_ENVIRONMENTS,
    CheckerConfig,
    Environment,
    SyncMode,
)
from .data_models import (
    AggregateResult,
    HistoricalCommitRecord,
    RevisionRecord,
    TipRevision,
)
from .errors import (
    ExtractionError,
    HistoryError,
    SyncError,
    TimestampParseError,
    ValidationError,
)
from .extractor import HistoricalWindowScanner, TipRevisionExtractor
from .git_client import GitClient
from .merger import DeduplicatingMerger
from .synchronizer import BranchSynchronizer
from .timestamps import normalize_to_utc

OUTPUT_SCHEMA_VERSION = "1"

# Errors that fail a single branch without aborting the run
BRANCH_ERRORS = (SyncError, ExtractionError, HistoryError, TimestampParseError)


class BranchState(str, Enum):
    """Processing state of one branch within a run."""

    PENDING = "pending"
    SYNCHRONIZING = "synchronizing"
    EXTRACTING_TIP = "extracting-tip"
    SCANNING_HISTORY = "scanning-history"
    MERGING = "merging"
    NORMALIZING = "normalizing"
    DONE = "done"
    FAILED = "failed"


def resolve_working_copy(directory: str | Path) -> Path:
    """
    Resolve and validate the working copy directory.

    Raises:
        ValidationError: If the path does not exist or is not a directory
    """
    path = Path(directory).expanduser()
    if not path.exists():
        raise ValidationError(f"Directory '{directory}' does not exist")
    if not path.is_dir():
        raise ValidationError(f"'{directory}' is not a directory")
    try:
        return path.resolve()
    except OSError as e:
        raise ValidationError(f"Cannot resolve directory '{directory}': {e}") from e


class RevisionChecker:
    """
    Reports the tracked revision value for each environment branch.

    Branches are processed strictly one after another because they share a
    single working copy. A branch that fails to synchronize, extract or
    read history contributes an empty record list; the remaining branches
    are still processed.
    """

    def __init__(
        self,
        working_dir: str | Path,
        config: CheckerConfig | None = None,
        client: GitClient | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize revision checker.

        Args:
            working_dir: Root of the git working copy to inspect
            config: Tracked file, key and remote settings
            client: Git client, built from working_dir when omitted
            clock: Current-time source for the history window

        Raises:
            ValidationError: If working_dir is not an existing directory
        """
        self.logger = get_logger(__name__)
        self.working_dir = resolve_working_copy(working_dir)
        self.config = config or CheckerConfig()
        self.client = client or GitClient(
            self.working_dir, executable=self.config.git_executable
        )

        self.synchronizer = BranchSynchronizer(self.client, remote=self.config.remote)
        self.tip_extractor = TipRevisionExtractor(
            self.client, self.config.revision_key
        )
        self.history_scanner = HistoricalWindowScanner(
            self.client, self.config.revision_key, clock=clock
        )
        self.merger = DeduplicatingMerger()
        self.branch_states: dict[str, BranchState] = {}

    @trace_function("check_revisions", include_args=True)
    def check(
        self,
        environments: list[Environment] | None = None,
        sync_mode: SyncMode = SyncMode.FAST_FORWARD,
        days: int = 0,
        progress_callback: Callable[[int, int, str], None] | None = None,
    ) -> AggregateResult:
        """
        Collect revision records for the selected environments.

        Args:
            environments: Environments to report, all when None or empty
            sync_mode: Whether to fast-forward branches to the remote
            days: History window in days, 0 for the tip only
            progress_callback: Optional progress callback

        Returns:
            AggregateResult with one entry per selected environment

        Raises:
            ValidationError: If days is negative
        """
        if days < 0:
            raise ValidationError(f"days must not be negative, got {days}")

        selected = set(environments or Environment)
        branches = [
            (branch, environment)
            for branch, environment in BRANCH_ENVIRONMENTS.items()
            if environment in selected
        ]

        self.branch_states = {branch: BranchState.PENDING for branch, _ in branches}
        result = AggregateResult(
            metadata={
                "schema_version": OUTPUT_SCHEMA_VERSION,
                "working_copy": str(self.working_dir),
                "revision_file": self.config.revision_file,
                "revision_key": self.config.revision_key,
                "sync_mode": sync_mode.value,
                "days": days,
            }
        )

        for index, (branch, environment) in enumerate(branches):
            if progress_callback:
                progress_callback(index, len(branches), f"Processing {branch}")

            result.environments[environment] = self._process_branch(
                branch, environment, sync_mode, days, result
            )

        if progress_callback:
            progress_callback(len(branches), len(branches), "Done")

        self.logger.info(
            f"Checked {len(branches)} branches, "
            f"{len(result.failed_branches)} failed"
        )
        return result

    def _process_branch(
        self,
        branch: str,
        environment: Environment,
        sync_mode: SyncMode,
        days: int,
        result: AggregateResult,
    ) -> list[RevisionRecord]:
        log = self.logger.bind(branch=branch, environment=environment.value)
        file_path = self.config.revision_file

        with trace_operation(
            "process_branch",
            {"branch": branch, "environment": environment.value},
        ):
            try:
                self.branch_states[branch] = BranchState.SYNCHRONIZING
                self.synchronizer.synchronize(branch, sync_mode)

                self.branch_states[branch] = BranchState.EXTRACTING_TIP
                tip = self.tip_extractor.extract(file_path)

                history: list[HistoricalCommitRecord] = []
                tip_commit_id = None
                if days > 0:
                    self.branch_states[branch] = BranchState.SCANNING_HISTORY
                    history = self.history_scanner.scan(file_path, days)
                    tip_commit_id = self.tip_extractor.lookup_commit_id(file_path)

                self.branch_states[branch] = BranchState.MERGING
                merged = self.merger.merge(tip, tip_commit_id, history)

                self.branch_states[branch] = BranchState.NORMALIZING
                records = self._normalize(merged, log)
            except BRANCH_ERRORS as e:
                self.branch_states[branch] = BranchState.FAILED
                result.failed_branches[branch] = str(e)
                log.error(
                    f"Error processing branch '{branch}' "
                    f"(environment {environment.value}, file {file_path}): {e}"
                )
                return []

        self.branch_states[branch] = BranchState.DONE
        log.debug(f"Branch {branch}: {len(records)} revision records")
        return records

    def _normalize(
        self, merged: list[TipRevision | HistoricalCommitRecord], log
    ) -> list[RevisionRecord]:
        """Convert timestamps to UTC, dropping historical records that fail.

        Raises:
            TimestampParseError: If the tip timestamp is malformed
        """
        records = []
        for entry in merged:
            try:
                commit_date = normalize_to_utc(entry.commit_date)
            except TimestampParseError as e:
                if isinstance(entry, TipRevision):
                    raise
                log.warning(f"Dropping commit {entry.commit_id[:12]}: {e}")
                continue
            records.append(RevisionRecord(digest=entry.value, commit_date=commit_date))
        return records
