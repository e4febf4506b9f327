"""
Error taxonomy for revision checking.

ValidationError is fatal to a run. SyncError, ExtractionError, HistoryError
and TimestampParseError are branch-local: the checker catches them at the
branch boundary and the environment contributes no records.
"""


class RevisionCheckerError(Exception):
    """Base exception for revision checker operations."""

    pass


class ValidationError(RevisionCheckerError):
    """Invalid invocation input such as an unknown environment or directory."""

    pass


class GitCommandError(RevisionCheckerError):
    """A git invocation exited non-zero or could not be started."""

    def __init__(self, args: list[str], returncode: int | None, stderr: str = ""):
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        # Multi-line git output (error plus hint: lines) is folded onto one line
        detail = "; ".join(
            line.strip() for line in self.stderr.splitlines() if line.strip()
        )
        detail = detail or "no error output"
        if returncode is None:
            message = f"'{' '.join(self.args_list)}' could not be run: {detail}"
        else:
            message = (
                f"'{' '.join(self.args_list)}' exited with status {returncode}: "
                f"{detail}"
            )
        super().__init__(message)


class SyncError(RevisionCheckerError):
    """Fetch, checkout or reset of a branch failed."""

    def __init__(self, branch: str, cause: str):
        self.branch = branch
        self.cause = cause
        super().__init__(f"failed to synchronize branch '{branch}': {cause}")


class ExtractionError(RevisionCheckerError):
    """The tracked file is unreadable or does not define the key."""

    def __init__(self, file_path: str, cause: str):
        self.file_path = file_path
        self.cause = cause
        super().__init__(f"failed to extract revision from '{file_path}': {cause}")


class HistoryError(RevisionCheckerError):
    """No commit could be found for the tracked file."""

    def __init__(self, file_path: str, cause: str):
        self.file_path = file_path
        self.cause = cause
        super().__init__(f"failed to read history of '{file_path}': {cause}")


class TimestampParseError(RevisionCheckerError):
    """A commit timestamp does not match 'YYYY-MM-DD HH:MM:SS +HHMM'."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"timestamp '{value}' does not match 'YYYY-MM-DD HH:MM:SS +HHMM'"
        )
