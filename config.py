"""
Configuration management for the EduVoice assistant.

Loads environment variables from .env file and provides typed access to configuration.
Provider credentials are read here and injected into provider clients at
construction time (see infra/config.py); nothing reads them globally afterwards.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


class Config:
    """Configuration class for the EduVoice assistant."""

    # API Configuration
    AGENT_PORT = int(os.getenv("AGENT_PORT", "8000"))

    # AI backend: "remote" (Gemini + Hugging Face) or "stub" (offline)
    AI_BACKEND = os.getenv("AI_BACKEND", "remote")

    # Provider credentials (models, endpoints and timeouts live in infra/config.py)
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
    HUGGINGFACE_API_KEY = os.getenv("HUGGINGFACE_API_KEY", "")

    # Upload limit enforced by the HTTP layer
    MAX_AUDIO_BYTES = int(os.getenv("MAX_AUDIO_BYTES", str(10 * 1024 * 1024)))

    # Environment
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    @classmethod
    def validate(cls) -> bool:
        """
        Check that at least one AI provider has a usable credential.

        Same rule as /health/ready: placeholder keys from a sample .env
        count as missing.
        """
        from infra import get_config

        if not any(get_config().provider_status().values()):
            print("⚠️  No AI provider credentials set (GEMINI_API_KEY, HUGGINGFACE_API_KEY)")
            print("   Canned answers will be used until one is set in .env")
            return False

        return True


if __name__ == "__main__":
    # Test configuration loading
    print("Configuration loaded:")
    print(f"  AI Backend: {Config.AI_BACKEND}")
    print(f"  Gemini API Key: {'✓ Set' if Config.GEMINI_API_KEY else '✗ Missing'}")
    print(f"  Hugging Face API Key: {'✓ Set' if Config.HUGGINGFACE_API_KEY else '✗ Missing'}")
    print(f"  Agent Port: {Config.AGENT_PORT}")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"\n  Validation: {'✓ PASSED' if Config.validate() else '✗ FAILED'}")
