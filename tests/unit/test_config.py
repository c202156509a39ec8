"""
Startup credential check tests.

Verifies:
- Placeholder keys are reported as missing, same as readiness
- One real key is enough
- Stub backend needs no keys
"""

import pytest

from config import Config


@pytest.fixture
def env(monkeypatch):
    for name in ("AI_BACKEND", "GEMINI_API_KEY", "HUGGINGFACE_API_KEY",
                 "PROVIDER_TIMEOUT_S", "AI_REQUEST_TIMEOUT_S"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigValidate:
    def test_no_keys(self, env):
        assert Config.validate() is False

    def test_placeholder_keys_count_as_missing(self, env):
        env.setenv("GEMINI_API_KEY", "your-gemini-api-key-here")
        env.setenv("HUGGINGFACE_API_KEY", "your-huggingface-api-key-here")

        assert Config.validate() is False

    def test_one_real_key_is_enough(self, env):
        env.setenv("GEMINI_API_KEY", "your-gemini-api-key-here")
        env.setenv("HUGGINGFACE_API_KEY", "hf_real")

        assert Config.validate() is True

    def test_stub_backend_needs_no_keys(self, env):
        env.setenv("AI_BACKEND", "stub")

        assert Config.validate() is True
