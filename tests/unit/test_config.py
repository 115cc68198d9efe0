"""
Unit tests for configuration management.
"""

import pytest
from unittest.mock import patch
import os


def test_settings_loads_from_environment():
    """Test that settings can be loaded from environment variables."""
    with patch.dict(os.environ, {
        'ENGINE_URL': 'http://engine:4000',
        'OPENAI_API_KEY': 'test_key',
        'ASSIST_MODEL': 'gpt-4o',
        'LOG_LEVEL': 'DEBUG',
        'REQUEST_TIMEOUT_SECONDS': '2.5',
        'WORKBENCH_PORT': '9000',
    }):
        from structura.config import Settings
        settings = Settings()

        assert settings.engine_url == 'http://engine:4000'
        assert settings.openai_api_key == 'test_key'
        assert settings.assist_model == 'gpt-4o'
        assert settings.log_level == 'DEBUG'
        assert settings.request_timeout_seconds == 2.5
        assert settings.workbench_port == 9000


def test_settings_has_default_values():
    """Test that settings have appropriate default values."""
    with patch.dict(os.environ, {}, clear=True):
        from structura.config import Settings
        settings = Settings(_env_file=None)

        assert settings.engine_url == 'http://127.0.0.1:4000'
        assert settings.engine_port == 4000
        assert settings.workbench_port == 8000
        assert settings.request_timeout_seconds == 10.0
        assert settings.assist_timeout_seconds == 60.0
        assert settings.openai_api_key is None
        assert settings.log_level == 'INFO'
