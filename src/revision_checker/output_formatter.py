"""
Output formatting for revision check results.

JSON output follows schema version 1: one key per selected environment, in
the order int, stg, prod, each holding an array of
``{"digest": ..., "commit_date": ...}`` objects with the tip first. Failed
environments map to an empty array.
"""

import json
from pathlib import Path
from typing import Any

from .config import ENVIRONMENT_BRANCHES
from .data_models import AggregateResult


class RevisionOutputFormatter:
    """Formats an AggregateResult for stdout or a file."""

    def to_dict(self, result: AggregateResult) -> dict[str, list[dict[str, str]]]:
        return {
            environment.value: [record.to_dict() for record in records]
            for environment, records in result.environments.items()
        }

    def format_json_output(self, result: AggregateResult) -> str:
        """Format result as JSON."""
        return json.dumps(self.to_dict(result), indent=2)

    def format_table_output(self, result: AggregateResult) -> str:
        """Format result as table for console display."""
        metadata: dict[str, Any] = result.metadata
        lines = [
            f"Revision Check: {metadata.get('working_copy', 'unknown')}",
            f"File: {metadata.get('revision_file', '')} "
            f"({metadata.get('revision_key', '')})",
            f"Sync Mode: {metadata.get('sync_mode', '')}",
        ]
        if metadata.get("days"):
            lines.append(f"History Window: {metadata['days']} days")
        lines.append("=" * 60)
        lines.append("")

        for environment, records in result.environments.items():
            branch = ENVIRONMENT_BRANCHES[environment]
            lines.append(f"{environment.value} ({branch})")
            lines.append("-" * 40)

            if branch in result.failed_branches:
                lines.append(f"  FAILED: {result.failed_branches[branch]}")
            elif not records:
                lines.append("  No revisions found")

            for index, record in enumerate(records):
                marker = "*" if index == 0 else " "
                lines.append(f"  {marker} {record.digest}  {record.commit_date}")
            lines.append("")

        return "\n".join(lines)

    def format_output(self, result: AggregateResult, format_type: str = "json") -> str:
        if format_type == "json":
            return self.format_json_output(result)
        elif format_type == "table":
            return self.format_table_output(result)
        raise ValueError(f"Unsupported format: {format_type}")

    def save_to_file(
        self,
        result: AggregateResult,
        output_path: str | Path,
        format_type: str = "json",
    ) -> None:
        """Save formatted output to file."""
        content = self.format_output(result, format_type)
        Path(output_path).write_text(content + "\n", encoding="utf-8")
