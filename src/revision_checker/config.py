"""
Configuration for revision checking.
"""

import os
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .errors import ValidationError


class Environment(str, Enum):
    """Deployment stages reported by the checker."""

    INT = "int"
    STG = "stg"
    PROD = "prod"


class SyncMode(str, Enum):
    """How a branch is brought into the working copy before it is read."""

    FAST_FORWARD = "fast-forward-to-remote"
    AS_IS = "as-is"


# Branch -> environment, in report order. Fixed at build time.
BRANCH_ENVIRONMENTS: dict[str, Environment] = {
    "main": Environment.INT,
    "release/hcp/public/stg": Environment.STG,
    "release/hcp/public/prod": Environment.PROD,
}

ENVIRONMENT_BRANCHES: dict[Environment, str] = {
    environment: branch for branch, environment in BRANCH_ENVIRONMENTS.items()
}

DEFAULT_REVISION_FILE = "hcp/Revision.mk"
DEFAULT_REVISION_KEY = "ARO_HCP_REPO_REVISION"
DEFAULT_REMOTE = "origin"
DEFAULT_GIT_EXECUTABLE = "git"


@dataclass
class CheckerConfig:
    """Settings shared by every component of a checker run."""

    revision_file: str = DEFAULT_REVISION_FILE
    revision_key: str = DEFAULT_REVISION_KEY
    remote: str = DEFAULT_REMOTE
    git_executable: str = DEFAULT_GIT_EXECUTABLE

    def __post_init__(self):
        """Normalize the tracked file to a repository-relative POSIX path."""
        path = self.revision_file.replace("\\", "/")
        while path.startswith("./"):
            path = path[2:]
        if not path or path.startswith("/"):
            raise ValidationError(
                f"revision file must be a relative path, got '{self.revision_file}'"
            )
        self.revision_file = path

        if not self.revision_key.strip():
            raise ValidationError("revision key must not be blank")

    @classmethod
    def from_env(cls) -> "CheckerConfig":
        """Build a config from REVISION_* and GIT_* environment variables."""
        return cls(
            revision_file=os.getenv("REVISION_FILE", DEFAULT_REVISION_FILE),
            revision_key=os.getenv("REVISION_KEY", DEFAULT_REVISION_KEY),
            remote=os.getenv("GIT_REMOTE", DEFAULT_REMOTE),
            git_executable=os.getenv("GIT_EXECUTABLE", DEFAULT_GIT_EXECUTABLE),
        )


def parse_environment_filter(values: Iterable[str] | None) -> list[Environment]:
    """
    Resolve an environment filter into environments in report order.

    Each value may hold several comma-separated names, so both
    ``["int,stg"]`` and ``["int", "stg"]`` select the same pair. An empty
    or missing filter selects every environment.

    Raises:
        ValidationError: If a name is not a known environment
    """
    requested: set[Environment] = set()
    for value in values or ():
        for name in value.split(","):
            name = name.strip().lower()
            if not name:
                continue
            try:
                requested.add(Environment(name))
            except ValueError as e:
                valid = ", ".join(env.value for env in Environment)
                raise ValidationError(
                    f"invalid environment '{name}' (valid: {valid})"
                ) from e

    if not requested:
        return list(Environment)
    return [env for env in Environment if env in requested]
