"""Generic JSON webhook report sink for regwatch.

Posts the pass digest as a JSON body to any configured HTTP endpoint.
"""

from __future__ import annotations

import httpx
import structlog

from regwatch.notifications.manager import ReportSink
from regwatch.notifications.report import Report

_log = structlog.get_logger(component="notifications.webhook")


class WebhookReportSink(ReportSink):
    """Delivers the report by POSTing a JSON payload to a configurable URL.

    Args:
        url:     Full endpoint URL.
        headers: Optional extra headers (e.g. Authorization).
        timeout: HTTP request timeout in seconds. Defaults to 10.
        client:  Optional pre-built ``httpx.AsyncClient`` (used by tests).
    """

    def __init__(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not url:
            raise ValueError("Webhook url must not be empty")
        self._url = url
        self._headers = headers or {}
        self._timeout = timeout
        self._client = client

    @property
    def channel_name(self) -> str:
        return "webhook"

    async def send(self, report: Report) -> bool:
        """POST *report* as JSON.  Returns True on a 2xx response."""
        payload = self._build_payload(report)
        request_headers = {
            "Content-Type": "application/json",
            **self._headers,
        }

        try:
            if self._client is not None:
                response = await self._client.post(self._url, json=payload, headers=request_headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(self._url, json=payload, headers=request_headers)
        except httpx.TimeoutException:
            _log.warning("webhook_request_timeout", url=self._url)
            return False
        except httpx.HTTPError as exc:
            _log.warning("webhook_http_error", error=str(exc))
            return False

        if response.is_success:
            return True
        _log.warning(
            "webhook_non_2xx_response",
            status_code=response.status_code,
            body=response.text[:200],
        )
        return False

    def _build_payload(self, report: Report) -> dict[str, object]:
        return {
            "subject": report.subject,
            "body": report.body,
            "checked": report.checked,
            "baselined": report.baselined,
            "changed": report.changed,
        }
