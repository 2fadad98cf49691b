import json
import os

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from server_alerts.errors import ConfigurationError
from server_alerts.utils.logger import get_logger

logger = get_logger("secrets")


def get_twilio_secrets(secret_name: str, region_name: str = None) -> dict:
    """
    Fetch Twilio credentials from AWS Secrets Manager.

    Expects the secret value to be a JSON object, e.g.:

        {
          "account_sid": "...",
          "auth_token": "..."
        }

    AWS_REGION is used when no region is given; defaults to us-east-1.
    """
    region_name = region_name or os.getenv("AWS_REGION", "us-east-1")

    logger.info(
        "Fetching Twilio secrets from Secrets Manager",
        extra={"fields": {"secret_name": secret_name, "region": region_name}},
    )

    client = boto3.client("secretsmanager", region_name=region_name)

    try:
        resp = client.get_secret_value(SecretId=secret_name)
    except (ClientError, BotoCoreError) as e:
        msg = f"Could not read secret '{secret_name}': {e}"
        logger.error(msg)
        raise ConfigurationError(msg) from e

    secret_str = resp.get("SecretString")

    if not secret_str:
        msg = f"Secret '{secret_name}' has no SecretString payload"
        logger.error(msg)
        raise ConfigurationError(msg)

    try:
        data = json.loads(secret_str)
    except json.JSONDecodeError as e:
        logger.error(
            "SecretString is not valid JSON",
            extra={"fields": {"secret_name": secret_name, "error": str(e)}},
        )
        raise ConfigurationError(f"Secret '{secret_name}' is not valid JSON") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Secret '{secret_name}' must be a JSON object")

    return data
