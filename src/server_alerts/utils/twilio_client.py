# utils/twilio_client.py

import os
from typing import Mapping, Optional, Sequence

from twilio.base.exceptions import TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client as TwilioClient

from server_alerts.dispatch import DispatchResult
from server_alerts.errors import ConfigurationError
from server_alerts.utils import secrets
from server_alerts.utils.logger import get_logger

logger = get_logger("twilio_client")

# Twilio answers 401 for a bad token, 403 for a token without SMS rights.
AUTH_STATUSES = (401, 403)


class TwilioTransport:
    """
    Sends one SMS per recipient through the Twilio Messages API.

    send() never raises: every provider fault comes back as a DispatchResult.
    """

    def __init__(self, client):
        self.client = client

    def send(self, sender: str, text: str, recipients: Sequence[int]) -> DispatchResult:
        failures = []

        for recipient in recipients:
            to = f"+{recipient}"
            try:
                resp = self.client.messages.create(from_=sender, to=to, body=text)
                logger.debug(
                    "twilio.sent",
                    extra={"fields": {"sid": getattr(resp, "sid", "<no-sid>"), "to": to}},
                )
            except TwilioRestException as e:
                if e.status in AUTH_STATUSES:
                    # Same credential for every recipient; the rest would fail too.
                    return DispatchResult.authentication_failure(
                        f"Twilio rejected credentials (HTTP {e.status}): {e.msg}"
                    )
                failures.append(f"{to}: HTTP {e.status} {e.msg}")
            except Exception as e:
                failures.append(f"{to}: {type(e).__name__}: {e}")

        if failures:
            return DispatchResult.transport_failure(
                f"{len(failures)} of {len(recipients)} recipients failed: " + "; ".join(failures)
            )
        return DispatchResult.sent()


def _resolve_credentials(env: Mapping[str, str]):
    account_sid = env.get("TWILIO_ACCOUNT_SID")
    auth_token = env.get("API_KEY")
    secret_name = env.get("TWILIO_SECRET_NAME")

    # Secrets Manager only fills in what the environment left out.
    if secret_name and not (account_sid and auth_token):
        data = secrets.get_twilio_secrets(secret_name, env.get("AWS_REGION"))
        account_sid = account_sid or data.get("account_sid")
        auth_token = auth_token or data.get("auth_token")

    missing = [
        name
        for name, value in [
            ("TWILIO_ACCOUNT_SID", account_sid),
            ("API_KEY", auth_token),
        ]
        if not value
    ]

    if missing:
        logger.error("Missing Twilio credentials", extra={"fields": {"missing": missing}})
        raise ConfigurationError(f"Missing Twilio credentials: {', '.join(missing)}")

    return account_sid, auth_token


def build_transport(
    timeout_seconds: float, environ: Optional[Mapping[str, str]] = None
) -> TwilioTransport:
    """
    Build the Twilio-backed transport.

    Credentials come from TWILIO_ACCOUNT_SID and API_KEY (the auth token),
    or from the TWILIO_SECRET_NAME secret when the environment lacks them.
    Every HTTP call is bounded by timeout_seconds; a timeout surfaces as a
    transport failure.
    """
    env = os.environ if environ is None else environ
    account_sid, auth_token = _resolve_credentials(env)

    client = TwilioClient(
        account_sid,
        auth_token,
        http_client=TwilioHttpClient(timeout=timeout_seconds),
    )
    logger.info("Twilio client initialized successfully")

    return TwilioTransport(client)
