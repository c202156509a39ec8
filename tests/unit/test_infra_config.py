"""
Test suite for infrastructure configuration and bootstrap.

Verifies:
- Defaults target the public Gemini and Hugging Face endpoints
- Chains are built in priority order
- Stub backend builds offline providers
- Bootstrap is a resettable singleton
"""

import pytest

from agent.orchestrator import AIRequestOrchestrator
from inference import Capability, GeminiTextClient, HuggingFaceTextClient, StubProviderClient
from infra import InfraBootstrap, InfraConfig, bootstrap_infrastructure
from services.stt import GeminiAudioClient, HuggingFaceWhisperClient

ENV_VARS = (
    "AI_BACKEND",
    "GEMINI_BASE_URL",
    "GEMINI_MODEL",
    "GEMINI_AUDIO_MODEL",
    "GEMINI_API_KEY",
    "HUGGINGFACE_BASE_URL",
    "HUGGINGFACE_TEXT_MODEL",
    "HUGGINGFACE_WHISPER_MODEL",
    "HUGGINGFACE_API_KEY",
    "PROVIDER_TIMEOUT_S",
    "AI_REQUEST_TIMEOUT_S",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_bootstrap():
    InfraBootstrap.reset()
    yield
    InfraBootstrap.reset()


class TestInfraConfig:
    """Test infrastructure configuration."""

    def test_config_from_env_defaults(self, clean_env):
        config = InfraConfig.from_env()

        assert config.ai_backend == "remote"
        assert config.gemini_base_url == "https://generativelanguage.googleapis.com/v1beta"
        assert config.gemini_model == "gemini-2.0-flash"
        assert config.gemini_audio_model == "gemini-1.5-flash"
        assert config.huggingface_base_url == "https://api-inference.huggingface.co"
        assert config.huggingface_text_model == "mistralai/Mistral-7B-Instruct-v0.2"
        assert config.huggingface_whisper_model == "openai/whisper-large-v3"
        assert config.gemini_api_key is None
        assert config.provider_timeout_s == 8.0
        assert config.request_timeout_s == 60.0

    def test_config_reads_overrides(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "AIza-real")
        clean_env.setenv("GEMINI_MODEL", "gemini-pro")
        clean_env.setenv("PROVIDER_TIMEOUT_S", "5")

        config = InfraConfig.from_env()

        assert config.gemini_api_key == "AIza-real"
        assert config.gemini_model == "gemini-pro"
        assert config.provider_timeout_s == 5.0

    def test_text_chain_order(self, clean_env):
        clients = InfraConfig.from_env().create_text_clients()

        assert [type(c) for c in clients] == [GeminiTextClient, HuggingFaceTextClient]
        assert [c.name for c in clients] == ["gemini", "huggingface"]

    def test_audio_chain_order(self, clean_env):
        clients = InfraConfig.from_env().create_audio_clients()

        assert [type(c) for c in clients] == [HuggingFaceWhisperClient, GeminiAudioClient]
        assert clients[1].descriptor.model == "gemini-1.5-flash"

    def test_timeout_injected_into_clients(self, clean_env):
        clean_env.setenv("PROVIDER_TIMEOUT_S", "7")
        clients = InfraConfig.from_env().create_text_clients()
        assert all(c.timeout_s == 7.0 for c in clients)

    def test_stub_backend(self, clean_env):
        clean_env.setenv("AI_BACKEND", "stub")
        config = InfraConfig.from_env()

        text = config.create_text_clients()
        audio = config.create_audio_clients()

        assert isinstance(text[0], StubProviderClient)
        assert audio[0].capability == Capability.AUDIO_TRANSCRIPTION
        assert config.provider_status() == {"stub": True}

    def test_provider_status_ignores_placeholders(self, clean_env):
        clean_env.setenv("GEMINI_API_KEY", "your-gemini-api-key-here")
        clean_env.setenv("HUGGINGFACE_API_KEY", "hf_real")

        status = InfraConfig.from_env().provider_status()

        assert status == {"gemini": False, "huggingface": True}


class TestTimeoutBudget:
    """Deadline must outlast the first provider's full retry budget."""

    def test_default_minimum(self, clean_env):
        config = InfraConfig.from_env()

        # 3 x 8s attempts + 2s + 4s backoff, then one 8s attempt on the fallback
        assert config.minimum_request_timeout_s() == 38.0
        assert config.request_timeout_s >= config.minimum_request_timeout_s()

    def test_deadline_shorter_than_first_provider_budget_rejected(self, clean_env):
        clean_env.setenv("PROVIDER_TIMEOUT_S", "30")

        with pytest.raises(ValueError) as exc_info:
            InfraConfig.from_env()

        assert "AI_REQUEST_TIMEOUT_S" in str(exc_info.value)

    def test_longer_deadline_accepts_slow_providers(self, clean_env):
        clean_env.setenv("PROVIDER_TIMEOUT_S", "30")
        clean_env.setenv("AI_REQUEST_TIMEOUT_S", "126")

        config = InfraConfig.from_env()

        assert config.provider_timeout_s == 30.0

    def test_stub_backend_skips_check(self, clean_env):
        clean_env.setenv("AI_BACKEND", "stub")
        clean_env.setenv("PROVIDER_TIMEOUT_S", "30")

        assert InfraConfig.from_env().ai_backend == "stub"


class TestBootstrap:
    def test_singleton(self, clean_env):
        clean_env.setenv("AI_BACKEND", "stub")

        first = bootstrap_infrastructure()
        second = bootstrap_infrastructure()

        assert first is second
        assert isinstance(first.get_orchestrator(), AIRequestOrchestrator)

    def test_reset_rebuilds(self, clean_env):
        clean_env.setenv("AI_BACKEND", "stub")
        first = bootstrap_infrastructure()

        InfraBootstrap.reset()

        assert bootstrap_infrastructure() is not first

    def test_custom_config_used_on_first_call(self, clean_env):
        clean_env.setenv("AI_BACKEND", "stub")
        config = InfraConfig.from_env()
        config.request_timeout_s = 3.0

        bootstrap = bootstrap_infrastructure(config)

        assert bootstrap.config is config
        assert bootstrap.get_orchestrator().request_timeout_s == 3.0

    def test_repr_lists_providers(self, clean_env):
        clean_env.setenv("AI_BACKEND", "stub")
        text = repr(bootstrap_infrastructure())
        assert "backend=stub" in text
        assert "stub_text" in text
        assert "stub_audio" in text
