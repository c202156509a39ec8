"""
Health check endpoints for deployment readiness.

Provides:
- /health/live: Liveness probe (service is running)
- /health/ready: Readiness probe (orchestrator can be built)

Neither probe contacts an AI provider. Missing credentials only degrade
readiness: the service still answers with canned responses.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass
class HealthStatus:
    """Health status response."""

    status: str  # "healthy", "degraded", "unhealthy"
    timestamp: str
    ready: bool
    uptime_seconds: float
    backend: str  # "remote", "stub"
    providers: Dict[str, bool]
    message: str


class HealthChecker:
    """
    Health checker for service readiness.

    Invariant: Health checks do NOT call external services.
    """

    def __init__(self, start_time: float):
        """Initialize health checker."""
        self.start_time = start_time

    def _uptime(self) -> float:
        return time.time() - self.start_time

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    def check_live(self) -> HealthStatus:
        """Liveness probe: always healthy if this code runs."""
        return HealthStatus(
            status="healthy",
            timestamp=self._now(),
            ready=True,
            uptime_seconds=self._uptime(),
            backend="unknown",
            providers={},
            message="Service process is running",
        )

    def check_ready(self) -> HealthStatus:
        """
        Readiness probe.

        healthy:   orchestrator built and at least one provider configured
        degraded:  orchestrator built, no provider credentials (canned only)
        unhealthy: orchestrator could not be built
        """
        try:
            from infra import bootstrap_infrastructure

            bootstrap = bootstrap_infrastructure()
        except Exception as e:
            return HealthStatus(
                status="unhealthy",
                timestamp=self._now(),
                ready=False,
                uptime_seconds=self._uptime(),
                backend="unknown",
                providers={},
                message=f"Orchestrator initialization failed: {e}",
            )

        providers = bootstrap.config.provider_status()
        any_configured = any(providers.values())

        return HealthStatus(
            status="healthy" if any_configured else "degraded",
            timestamp=self._now(),
            ready=True,
            uptime_seconds=self._uptime(),
            backend=bootstrap.config.ai_backend,
            providers=providers,
            message=(
                "AI providers configured"
                if any_configured
                else "No AI provider credentials; serving canned responses"
            ),
        )

    def to_dict(self, status: HealthStatus) -> Dict[str, Any]:
        """Convert HealthStatus to dict for JSON serialization."""
        return {
            "status": status.status,
            "timestamp": status.timestamp,
            "ready": status.ready,
            "uptime_seconds": status.uptime_seconds,
            "backend": status.backend,
            "providers": status.providers,
            "message": status.message,
        }


# Global health checker instance
_health_checker: Optional[HealthChecker] = None


def initialize_health_checker():
    """Initialize global health checker."""
    global _health_checker
    _health_checker = HealthChecker(start_time=time.time())


def get_health_checker() -> HealthChecker:
    """Get or initialize health checker."""
    if _health_checker is None:
        initialize_health_checker()
    return _health_checker  # type: ignore[return-value]


async def health_live() -> Dict[str, Any]:
    """GET /health/live endpoint."""
    checker = get_health_checker()
    return checker.to_dict(checker.check_live())


async def health_ready() -> Dict[str, Any]:
    """GET /health/ready endpoint."""
    checker = get_health_checker()
    return checker.to_dict(checker.check_ready())
