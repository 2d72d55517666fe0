"""
Test configuration and fixtures.
Storage tests never reach a network: operations run against MagicMock
clients, and presigning (a local computation) uses a real boto3 client.
"""
import os
import uuid as uuid_module

# Set test environment before any imports
os.environ["S3_ENDPOINT"] = ""
os.environ["S3_BUCKET"] = ""
os.environ["S3_ACCESS_KEY"] = ""
os.environ["S3_SECRET_KEY"] = ""
os.environ["LOG_LEVEL"] = "DEBUG"

import pytest
from unittest.mock import MagicMock

from object_gateway.storage.client import ConnectionConfig, get_client
from object_gateway.storage.keys import KeyGenerator


FIXED_UUID = uuid_module.UUID("3b241101-e2bb-4255-8caf-4136c566a962")
FIXED_TIME = 1700000000.75
TEST_ENDPOINT = "https://storage.example.com"
TEST_BUCKET = "media"


@pytest.fixture
def connection_config() -> ConnectionConfig:
    """Credential bundle pointing at a fake TLS endpoint."""
    return ConnectionConfig(
        access_key="AKIATESTACCESSKEY",
        secret_key="test-secret-key",
        bucket=TEST_BUCKET,
        endpoint="storage.example.com",
    )


@pytest.fixture
def fixed_key_generator() -> KeyGenerator:
    """Key generator with deterministic random and clock sources."""
    return KeyGenerator(uuid_factory=lambda: FIXED_UUID, clock=lambda: FIXED_TIME)


@pytest.fixture
def mock_s3_client() -> MagicMock:
    """S3 client double recording every backend call."""
    client = MagicMock()
    client.meta.endpoint_url = TEST_ENDPOINT
    client.put_object.return_value = {"ETag": '"d41d8cd98f00b204e9800998ecf8427e"'}
    return client


@pytest.fixture
def real_s3_client(connection_config: ConnectionConfig):
    """Real boto3 client; only used for local operations such as presigning."""
    return get_client(connection_config)


@pytest.fixture
def fixed_uuid() -> uuid_module.UUID:
    """The id returned by fixed_key_generator."""
    return FIXED_UUID
