"""
Server Alerts Utilities
=======================

Shared helper modules:

- logger.py          → structured JSON logging, diagnostics channel
- secrets.py         → AWS Secrets Manager integration
- twilio_client.py   → Twilio-backed messaging transport
"""
