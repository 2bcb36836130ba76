"""Console report sink: prints the digest to stdout."""

from __future__ import annotations

import sys
from typing import TextIO

import structlog

from regwatch.notifications.manager import ReportSink
from regwatch.notifications.report import Report

_log = structlog.get_logger(component="notifications.console")


class ConsoleReportSink(ReportSink):
    """Writes the report subject and body to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def channel_name(self) -> str:
        return "console"

    async def send(self, report: Report) -> bool:
        stream = self._stream or sys.stdout
        try:
            stream.write(f"{report.subject}\n\n{report.body}\n")
            stream.flush()
        except OSError as exc:
            _log.warning("console_write_error", error=str(exc))
            return False
        _log.info("report_printed", subject=report.subject, changed=report.changed)
        return True
