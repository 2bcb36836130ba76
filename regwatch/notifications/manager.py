"""Report sinks and dispatcher for regwatch.

ReportSink       -- ABC every sink must implement.
ReportDispatcher -- Sends the single per-pass report to every registered
                    sink; a failure in one sink never blocks the others.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

import structlog

from regwatch.notifications.report import Report

_log = structlog.get_logger(component="notifications.manager")


class ReportSink(ABC):
    """Abstract base class for all report sinks.

    Every concrete sink must implement ``send``, which should not raise on
    delivery failure; return ``False`` instead.
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Human-readable sink identifier used in logs."""

    @abstractmethod
    async def send(self, report: Report) -> bool:
        """Deliver *report* via this sink.

        Returns:
            True  -- message accepted by the remote endpoint.
            False -- delivery failed (already logged inside implementation).
        """


class ReportDispatcher:
    """Fan-out dispatcher for the per-pass report.

    * Never raises; exceptions from individual sinks are caught and logged.
    * Awaits every sink, so the process does not exit before delivery.
    """

    def __init__(self, sinks: list[ReportSink]) -> None:
        self._sinks = sinks

    @property
    def sinks(self) -> list[ReportSink]:
        return list(self._sinks)

    async def deliver(self, report: Report) -> bool:
        """Send *report* to every sink.  True only if all sinks succeeded."""
        results = await asyncio.gather(*(self._send_one(sink, report) for sink in self._sinks))
        return all(results)

    async def _send_one(self, sink: ReportSink, report: Report) -> bool:
        try:
            success = await sink.send(report)
        except Exception as exc:  # noqa: BLE001
            _log.error(
                "report_sink_unexpected_error",
                channel=sink.channel_name,
                error=str(exc),
            )
            success = False

        if success:
            _log.info(
                "report_sent",
                channel=sink.channel_name,
                subject=report.subject,
                changed=report.changed,
            )
        else:
            _log.warning("report_failed", channel=sink.channel_name, subject=report.subject)
        return success
