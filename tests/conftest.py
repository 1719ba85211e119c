"""Shared test fixtures for ratesense."""

import os
import sys
import tempfile

import pytest
from loguru import logger


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "export_dir": os.path.join(tmp_dir, "exports"),
        },
        "calculator": {
            "rate_deltas": [0, 0.5],
            "table_rows": 6,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def log_messages():
    """Capture loguru output as a list of formatted messages."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def _restore_loguru():
    """CLI tests reconfigure loguru; put the default sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")
