"""
Log handler that turns qualifying log records into SMS alerts.

Attach an AlertSink to any logger; every record at or above the configured
threshold is shaped into a short text and handed to the messaging transport.
Delivery problems are reported on the diagnostics logger and never reach the
code that logged the record.
"""

import logging
from typing import Optional

from server_alerts.config import AlertConfiguration
from server_alerts.dispatch import DispatchResult, MessagingTransport
from server_alerts.utils.logger import get_diagnostics_logger

MAX_ALERT_LENGTH = 140
ELLIPSIS = "..."


def format_alert_text(message: str) -> str:
    """
    Shape a log message into alert text.

    Messages over MAX_ALERT_LENGTH get ELLIPSIS appended but are NOT cut;
    the full message is still sent, so the limit is not enforced.
    TODO: switch to message[:MAX_ALERT_LENGTH] once a real cap is signed off.
    """
    if len(message) > MAX_ALERT_LENGTH:
        return f"{message}{ELLIPSIS}"
    return message


class AlertSink(logging.Handler):
    def __init__(
        self,
        config: AlertConfiguration,
        transport: MessagingTransport,
        diagnostics: Optional[logging.Logger] = None,
    ):
        super().__init__(level=config.threshold)
        self.config = config
        self.transport = transport
        self.diagnostics = diagnostics or get_diagnostics_logger()

    def handle(self, record: logging.LogRecord):
        # Config is frozen, so no handler lock: concurrent loggers must not
        # queue up behind one slow SMS call.
        if record.levelno < self.config.threshold:
            return False
        rv = self.filter(record)
        if not rv:
            return False
        # Since 3.12 a filter may hand back a replacement record.
        if isinstance(rv, logging.LogRecord):
            record = rv
        self.emit(record)
        return rv

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = format_alert_text(str(record.getMessage()))
        except Exception as e:
            # Bad %-args on the record; fall back to the raw template.
            self._report("format_error", f"{type(e).__name__}: {e}", record)
            text = format_alert_text(str(record.msg))

        try:
            result = self.transport.send(
                sender=self.config.originator,
                text=text,
                recipients=self.config.recipients,
            )
        except Exception as e:
            result = DispatchResult.transport_failure(f"{type(e).__name__}: {e}")

        if not result.ok:
            self._report(result.status.value, result.cause, record)

    def _report(self, kind: str, cause: str, record: logging.LogRecord) -> None:
        try:
            self.diagnostics.warning(
                "alert.dispatch_failed",
                extra={
                    "fields": {
                        "failure": kind,
                        "cause": cause,
                        "source_logger": record.name,
                        "source_level": record.levelname,
                    }
                },
            )
        except Exception:
            # Last resort; logging's own stderr hook.
            self.handleError(record)


def install_sink(logger: logging.Logger, sink: AlertSink) -> AlertSink:
    """
    Attach sink to logger, dropping any AlertSink attached earlier.

    Warm Lambda containers re-run wiring on reload; without this each
    reload would add one more SMS per error.
    """
    for handler in list(logger.handlers):
        if isinstance(handler, AlertSink):
            logger.removeHandler(handler)
    logger.addHandler(sink)
    return sink
