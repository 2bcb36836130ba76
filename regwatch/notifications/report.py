"""Rendering of a pass result into a single notification message."""

from __future__ import annotations

from dataclasses import dataclass

from regwatch.models.report import PassResult

_TITLE = "Registry Watch"


@dataclass(frozen=True)
class Report:
    """Subject line and plain-text body of one pass notification."""

    subject: str
    body: str
    checked: int = 0
    baselined: int = 0
    changed: int = 0


def render_report(result: PassResult) -> Report:
    """Render *result* as a digest.

    A report is produced for every completed pass, including passes with no
    changes, so that a missing message always means the pass did not run.
    """
    if result.changes:
        subject = f"{_TITLE} — {len(result.changes)} changed ({result.run_at})"
    else:
        subject = f"{_TITLE} — No changes ({result.run_at})"

    lines = [
        f"Run time: {result.run_at}",
        f"Checked: {len(result.checked)}",
    ]
    if result.skipped:
        lines.append(f"Skipped: {len(result.skipped)}")
    lines.append("")

    if result.baselined:
        lines.append("New baselines created:")
        lines.extend(f"- {entry}" for entry in result.baselined)
        lines.append("")

    if not result.changes:
        lines.append("No changes detected.")
    else:
        lines.append("Changes detected:")
        lines.append("")
        for change in result.changes:
            lines.append(f"UID: {change.key}")
            if change.label:
                lines.append(f"Label: {change.label}")
            if change.detail_url:
                lines.append(f"Registry: {change.detail_url}")
            lines.append("Diff:")
            lines.extend(f"- {line}" for line in change.field_diffs)
            lines.append("")

    if result.skipped:
        lines.append("")
        lines.append("Skipped:")
        lines.extend(f"- {skip.key} ({skip.reason.value})" for skip in result.skipped)

    return Report(
        subject=subject,
        body="\n".join(lines),
        checked=len(result.checked),
        baselined=len(result.baselined),
        changed=len(result.changes),
    )
