"""
Combines the tip with the historical window into one ordered sequence.
"""

from ..shared_utilities import get_logger
from .data_models import HistoricalCommitRecord, TipRevision


class DeduplicatingMerger:
    """Puts the tip first and drops the historical entry for the tip commit."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def merge(
        self,
        tip: TipRevision,
        tip_commit_id: str | None,
        history: list[HistoricalCommitRecord],
    ) -> list[TipRevision | HistoricalCommitRecord]:
        """
        Merge the tip with the scanner output.

        Historical records keep the scanner's order. When the tip commit is
        unknown every historical record is kept, so the tip commit may then
        appear twice.
        """
        if tip_commit_id is None:
            if history:
                self.logger.warning(
                    "Tip commit unknown, keeping all "
                    f"{len(history)} historical records without de-duplication"
                )
            return [tip, *history]

        merged: list[TipRevision | HistoricalCommitRecord] = [tip]
        merged.extend(record for record in history if record.commit_id != tip_commit_id)
        return merged
