"""Human readable diff report for version history previews."""

from __future__ import annotations

from typing import Any

from prompt_history.modules.text_diff.schemas import DiffObject


def format_diff(diff: DiffObject | dict[str, Any]) -> str:
    d = DiffObject.from_json(diff)
    lines = ["=== DIFF REPORT ===", ""]

    if d.modified:
        lines.append("MODIFIED:")
        for m in d.modified:
            lines.append(f"  Line {m.old_index}:")
            lines.append(f"    - {m.old_content}")
            lines.append(f"    + {m.new_content}")
        lines.append("")

    if d.removed:
        lines.append("REMOVED:")
        for r in d.removed:
            lines.append(f"  Line {r.old_index}: {r.content}")
        lines.append("")

    if d.added:
        lines.append("ADDED:")
        for a in d.added:
            lines.append(f"  Line {a.new_index}: {a.content}")
        lines.append("")

    stats = d.stats
    lines.append("STATS:")
    lines.append(f"  Total changes: {stats.total_changes}")
    lines.append(f"  Lines modified: {stats.lines_modified}")
    lines.append(f"  Lines added: {stats.lines_added}")
    lines.append(f"  Lines removed: {stats.lines_removed}")

    return "\n".join(lines)
