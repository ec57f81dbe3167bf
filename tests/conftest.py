# tests/conftest.py
# ------------------------------------------------------------
# Purpose: Shared fixtures: a throwaway RSA key pair, helpers to
#          write an encrypted credentials file, and a fake
#          requests session standing in for NerdGraph.
# ------------------------------------------------------------

import json
from unittest import mock

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from dashboard_backup.models.config import BackupConfig
from dashboard_backup.services.decryption import encrypt


def _generate_pem_pair():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")
    return private_pem, public_pem


@pytest.fixture(scope="session")
def key_pair():
    # Key generation is slow; one pair per test session is enough.
    return _generate_pem_pair()


@pytest.fixture(scope="session")
def other_key_pair():
    return _generate_pem_pair()


@pytest.fixture
def make_backup_config(tmp_path, key_pair):
    """Write an encrypted credentials file and return a config pointing at it."""

    def _make(csv_text, private_pem=None):
        private_default, public_pem = key_pair
        credentials_path = tmp_path / "accounts_keys.enc"
        key_path = tmp_path / "private_key.pem"
        credentials_path.write_text(encrypt(csv_text, public_pem), encoding="utf-8")
        key_path.write_text(private_pem or private_default, encoding="utf-8")
        return BackupConfig(
            credentials_path=str(credentials_path),
            private_key_path=str(key_path),
            output_dir=str(tmp_path / "dashboards_output"),
        )

    return _make


def make_response(payload=None, status_code=200, text=None):
    """Build a stand-in for requests.Response."""
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text if text is not None else json.dumps(payload)
    if payload is None and text is not None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def fake_session():
    """A requests.Session mock; set .post.side_effect / .post.return_value per test."""
    return mock.Mock(spec=requests.Session)


def listing_payload(*entities):
    return {"data": {"actor": {"entitySearch": {"results": {"entities": list(entities)}}}}}


def detail_payload(entity):
    return {"data": {"actor": {"entity": entity}}}


@pytest.fixture
def nerdgraph_responses():
    """Helpers for building canned NerdGraph responses."""
    return mock.Mock(
        response=make_response,
        listing=lambda *entities: make_response(listing_payload(*entities)),
        detail=lambda entity: make_response(detail_payload(entity)),
    )
