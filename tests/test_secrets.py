import json

import pytest
from botocore.exceptions import ClientError

from server_alerts.errors import ConfigurationError
from server_alerts.utils import secrets


class StubSecretsManager:
    def __init__(self, secret_string=None, error=None):
        self.secret_string = secret_string
        self.error = error
        self.requested = []

    def get_secret_value(self, SecretId):
        self.requested.append(SecretId)
        if self.error is not None:
            raise self.error
        return {"SecretString": self.secret_string}


def _patch_boto3(monkeypatch, stub):
    regions = []

    class FakeBoto3:
        def client(self, name, region_name=None):
            assert name == "secretsmanager"
            regions.append(region_name)
            return stub

    monkeypatch.setattr("server_alerts.utils.secrets.boto3", FakeBoto3(), raising=True)
    return regions


def test_reads_json_secret(monkeypatch):
    stub = StubSecretsManager(json.dumps({"account_sid": "ACxxx", "auth_token": "tok"}))
    regions = _patch_boto3(monkeypatch, stub)
    monkeypatch.setenv("AWS_REGION", "eu-west-1")

    data = secrets.get_twilio_secrets("server-alerts/twilio")

    assert data == {"account_sid": "ACxxx", "auth_token": "tok"}
    assert stub.requested == ["server-alerts/twilio"]
    assert regions == ["eu-west-1"]


def test_invalid_json_is_configuration_error(monkeypatch):
    _patch_boto3(monkeypatch, StubSecretsManager("not-json"))

    with pytest.raises(ConfigurationError):
        secrets.get_twilio_secrets("server-alerts/twilio", "us-east-1")


def test_missing_secret_is_configuration_error(monkeypatch):
    error = ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "not found"}},
        "GetSecretValue",
    )
    _patch_boto3(monkeypatch, StubSecretsManager(error=error))

    with pytest.raises(ConfigurationError) as exc:
        secrets.get_twilio_secrets("server-alerts/twilio", "us-east-1")
    assert "ResourceNotFoundException" in str(exc.value)
