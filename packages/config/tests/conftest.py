"""Pytest configuration and fixtures for config package tests."""

import pytest


@pytest.fixture
def sample_config_dict():
    """Sample pattern configuration dictionary."""
    return {
        "patterns": {
            "port": {
                "origin": "int",
                "source": "\\d+",
                "mode": "regex_convert",
            },
            "name": {
                "source": "[a-z]+",
            },
        },
    }
