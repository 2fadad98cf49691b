"""
Server Alerts
=============

Forwards application log events at or above a severity threshold to a list
of phones as SMS, through Twilio. Runs as an AWS Lambda behind an API
Gateway HTTP API.

Modules under this package:
- app.py          → Lambda entry point; wires the logger and serves / and /simulateError
- alert_sink.py   → logging.Handler that filters, shapes and dispatches alerts
- config.py       → AlertConfiguration loaded once per container
- errors.py       → ConfigurationError
- dispatch.py     → DispatchResult and the MessagingTransport protocol
- utils/          → Shared helpers (logging, secrets, Twilio transport)

Environment variables expected:
  • ORIGINATOR                 - Sender identity shown on the SMS
  • RECIPIENTS                 - Comma-separated numeric phone numbers
  • TWILIO_ACCOUNT_SID         - Twilio account
  • API_KEY                    - Twilio auth token
  • TWILIO_SECRET_NAME         - Secrets Manager fallback for the two above (optional)
  • ALERT_LEVEL                - Alert threshold (default: ERROR)
  • TRANSPORT_TIMEOUT_SECONDS  - Bound on each Twilio call (default: 10)
  • STARTUP_SELF_TEST          - Log one line per level on cold start (optional)
  • LOG_LEVEL                  - Log verbosity (default: INFO)
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
