import logging
import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from server_alerts.errors import ConfigurationError
from server_alerts.utils.logger import get_logger

logger = get_logger("config")

DEFAULT_THRESHOLD = logging.ERROR
DEFAULT_TIMEOUT_SECONDS = 10.0

# WARN and FATAL are the names the alerting world uses; logging keeps them as aliases.
LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "FATAL": logging.CRITICAL,
    "CRITICAL": logging.CRITICAL,
}

_TRUTHY = {"1", "true", "yes", "on"}

# ASCII digits with an optional sign; int() alone also takes "1_000" and non-ASCII digits.
_RECIPIENT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class AlertConfiguration:
    originator: str
    recipients: Tuple[int, ...]
    threshold: int = DEFAULT_THRESHOLD
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    self_test: bool = False

    def __post_init__(self):
        if not self.recipients:
            raise ConfigurationError("AlertConfiguration needs at least one recipient")


def _fail(msg: str) -> None:
    logger.error(msg)
    raise ConfigurationError(msg)


def parse_recipients(raw: str) -> Tuple[int, ...]:
    """
    Parse a comma-separated RECIPIENTS value into phone numbers.

    "31600000000, 31611111111" -> (31600000000, 31611111111)

    Raises ConfigurationError on an empty item or anything other than
    plain ASCII digits with an optional sign.
    """
    recipients = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            _fail(f"Invalid RECIPIENTS='{raw}': empty recipient entry")
        if not _RECIPIENT_RE.fullmatch(item):
            _fail(f"Invalid recipient '{item}' in RECIPIENTS. Must be a numeric phone number.")
        recipients.append(int(item))
    return tuple(recipients)


def parse_level(raw: str) -> int:
    level = LEVEL_NAMES.get(raw.strip().upper())
    if level is None:
        _fail(
            f"Invalid ALERT_LEVEL='{raw}'. "
            f"Must be one of: {', '.join(sorted(LEVEL_NAMES))}."
        )
    return level


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError:
        timeout = 0.0
    if timeout <= 0:
        _fail(
            f"Invalid TRANSPORT_TIMEOUT_SECONDS='{raw}'. "
            "Must be a positive number of seconds."
        )
    return timeout


def load_config(environ: Optional[Mapping[str, str]] = None) -> AlertConfiguration:
    """
    Build the alert configuration from environment-style settings.

    ORIGINATOR: sender identity shown on the SMS
    RECIPIENTS: comma-separated numeric phone numbers
    ALERT_LEVEL: minimum level that raises an alert (default ERROR)
    TRANSPORT_TIMEOUT_SECONDS: bound on each provider call (default 10)
    STARTUP_SELF_TEST: emit one log line per level on cold start

    Provider credentials are not read here; see utils.twilio_client.

    Raises ConfigurationError with a clear message if something is missing/invalid.
    """
    env = os.environ if environ is None else environ

    originator = (env.get("ORIGINATOR") or "").strip()
    recipients_raw = (env.get("RECIPIENTS") or "").strip()

    missing = []
    if not originator:
        missing.append("ORIGINATOR")
    if not recipients_raw:
        missing.append("RECIPIENTS")

    if missing:
        _fail(f"Missing required environment variables: {', '.join(missing)}")

    recipients = parse_recipients(recipients_raw)
    threshold = parse_level(env.get("ALERT_LEVEL") or "ERROR")
    timeout_seconds = _parse_timeout(
        env.get("TRANSPORT_TIMEOUT_SECONDS") or str(DEFAULT_TIMEOUT_SECONDS)
    )
    self_test = (env.get("STARTUP_SELF_TEST") or "").strip().lower() in _TRUTHY

    return AlertConfiguration(
        originator=originator,
        recipients=recipients,
        threshold=threshold,
        timeout_seconds=timeout_seconds,
        self_test=self_test,
    )
