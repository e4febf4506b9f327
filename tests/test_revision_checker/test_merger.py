"""Tests for merging the tip with the history window."""

from src.revision_checker.data_models import HistoricalCommitRecord, TipRevision
from src.revision_checker.merger import DeduplicatingMerger

TIP = TipRevision(value="333", commit_date="2025-09-23 10:00:00 +0000")


def record(commit_id, value, date="2025-09-20 10:00:00 +0000"):
    return HistoricalCommitRecord(commit_id=commit_id, commit_date=date, value=value)


class TestDeduplicatingMerger:
    """Test DeduplicatingMerger."""

    def test_tip_only(self):
        assert DeduplicatingMerger().merge(TIP, None, []) == [TIP]
        assert DeduplicatingMerger().merge(TIP, "c3", []) == [TIP]

    def test_tip_commit_appears_once(self):
        """Test the historical copy of the tip commit is dropped."""
        history = [record("c3", "333", TIP.commit_date)]

        merged = DeduplicatingMerger().merge(TIP, "c3", history)

        assert merged == [TIP]

    def test_history_order_is_preserved(self):
        history = [
            record("c3", "333", TIP.commit_date),
            record("c2", "222"),
            record("c1", "111"),
        ]

        merged = DeduplicatingMerger().merge(TIP, "c3", history)

        assert merged == [TIP, history[1], history[2]]

    def test_same_value_different_commit_is_kept(self):
        """Test de-duplication is by commit identifier, not value."""
        history = [record("c2", "333")]

        merged = DeduplicatingMerger().merge(TIP, "c3", history)

        assert merged == [TIP, history[0]]

    def test_unknown_tip_commit_keeps_everything(self):
        """Test the fallback keeps duplicates rather than losing history."""
        history = [record("c3", "333", TIP.commit_date), record("c2", "222")]

        merged = DeduplicatingMerger().merge(TIP, None, history)

        assert merged == [TIP, *history]
