"""
Shared fixtures for integration tests.

This module provides mock devices, loaded from fixtures/devices.yaml and
served on 127.0.0.1, for exercising the client over real sockets.
"""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
import yaml

from tests.helpers.device import MockDevice, build_device


@pytest.fixture(scope="session")
def integration_fixtures_dir():
    """Path to integration test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def device_configs(integration_fixtures_dir):
    """Load mock device configurations from fixtures/devices.yaml."""
    devices_file = integration_fixtures_dir / "devices.yaml"
    with open(devices_file) as f:
        return yaml.safe_load(f)["devices"]


@pytest.fixture
def plaintext_config(device_configs) -> dict[str, Any]:
    """Relay device without encryption or password."""
    return device_configs[0]


@pytest.fixture
def noise_config(device_configs) -> dict[str, Any]:
    """Garage door device requiring Noise encryption and a password."""
    return device_configs[1]


@pytest_asyncio.fixture
async def plaintext_device(plaintext_config) -> AsyncGenerator[MockDevice]:
    """Running plaintext mock device."""
    device = build_device(plaintext_config)
    await device.start()
    yield device
    await device.stop()


@pytest_asyncio.fixture
async def noise_device(noise_config) -> AsyncGenerator[MockDevice]:
    """Running Noise mock device."""
    device = build_device(noise_config)
    await device.start()
    yield device
    await device.stop()
