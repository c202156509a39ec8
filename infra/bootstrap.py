"""
Infrastructure initialization and bootstrap.

Singleton pattern for creating the orchestrator from configuration.
The orchestrator holds only immutable provider clients, so sharing one
instance across requests shares no mutable state.
"""

from typing import Optional

from agent.orchestrator import AIRequestOrchestrator

from .config import InfraConfig, get_config


class InfraBootstrap:
    """
    Bootstrap infrastructure based on configuration.

    Singleton pattern - single instance per process.
    """

    _instance: Optional["InfraBootstrap"] = None

    def __init__(self, config: Optional[InfraConfig] = None):
        """Initialize bootstrap with configuration."""
        self.config = config or get_config()
        self.orchestrator = self.config.create_orchestrator()

    @classmethod
    def get_instance(cls, config: Optional[InfraConfig] = None) -> "InfraBootstrap":
        """
        Get singleton instance.

        Args:
            config: Optional custom configuration (only used first time)

        Returns:
            Singleton InfraBootstrap instance
        """
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (for testing)."""
        cls._instance = None

    def get_orchestrator(self) -> AIRequestOrchestrator:
        return self.orchestrator

    def __repr__(self) -> str:
        """String representation showing configured providers."""
        text = ",".join(c.name for c in self.orchestrator.text_clients)
        audio = ",".join(c.name for c in self.orchestrator.audio_clients)
        return f"InfraBootstrap(backend={self.config.ai_backend}, text=[{text}], audio=[{audio}])"


def bootstrap_infrastructure(config: Optional[InfraConfig] = None) -> InfraBootstrap:
    """
    Bootstrap the orchestrator and its providers.

    Args:
        config: Optional custom configuration

    Returns:
        InfraBootstrap instance with the orchestrator initialized
    """
    return InfraBootstrap.get_instance(config)
