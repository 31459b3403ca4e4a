"""Health check endpoints."""

from .checks import health_check, readiness_check, liveness_check

__all__ = ["health_check", "readiness_check", "liveness_check"]
