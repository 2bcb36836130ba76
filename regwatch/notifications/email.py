"""Email report sink for regwatch.

The digest goes out as a single plain-text message.  ``smtplib`` is
blocking, so delivery runs in the default thread-pool executor.
"""

from __future__ import annotations

import asyncio
import smtplib
import ssl
from dataclasses import dataclass
from email.mime.text import MIMEText

import structlog

from regwatch.notifications.manager import ReportSink
from regwatch.notifications.report import Report

_log = structlog.get_logger(component="notifications.email")


@dataclass(frozen=True)
class SMTPConfig:
    """SMTP connection parameters.

    ``use_tls`` selects implicit TLS (``SMTP_SSL``, usually port 465);
    otherwise the connection is upgraded with STARTTLS (usually port 587).
    An empty ``username`` skips authentication.
    """

    host: str
    port: int
    username: str
    password: str
    from_addr: str
    use_tls: bool = False
    timeout: float = 10.0

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("SMTP host must not be empty")
        if not self.from_addr:
            raise ValueError("SMTP from_addr must not be empty")


class EmailReportSink(ReportSink):
    """Mails the pass report to *to_addr* (comma-separated lists allowed)."""

    def __init__(self, smtp_config: SMTPConfig, to_addr: str) -> None:
        if not to_addr:
            raise ValueError("Email to_addr must not be empty")
        self._smtp = smtp_config
        self._to_addr = to_addr

    @property
    def channel_name(self) -> str:
        return "email"

    async def send(self, report: Report) -> bool:
        message = self._compose(report)
        try:
            await asyncio.get_running_loop().run_in_executor(None, self._deliver, message)
        except smtplib.SMTPException as exc:
            _log.warning("email_smtp_error", error=str(exc), to=self._to_addr)
            return False
        except OSError as exc:
            _log.warning("email_connection_error", error=str(exc), host=self._smtp.host, to=self._to_addr)
            return False
        return True

    def _compose(self, report: Report) -> MIMEText:
        message = MIMEText(report.body, "plain", "utf-8")
        message["Subject"] = report.subject
        message["From"] = self._smtp.from_addr
        message["To"] = self._to_addr
        return message

    def _connect(self) -> smtplib.SMTP:
        cfg = self._smtp
        context = ssl.create_default_context()
        if cfg.use_tls:
            return smtplib.SMTP_SSL(cfg.host, cfg.port, context=context, timeout=cfg.timeout)
        server = smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout)
        try:
            server.ehlo()
            server.starttls(context=context)
            server.ehlo()
        except BaseException:
            server.close()
            raise
        return server

    def _deliver(self, message: MIMEText) -> None:
        with self._connect() as server:
            if self._smtp.username:
                server.login(self._smtp.username, self._smtp.password)
            server.send_message(message)
