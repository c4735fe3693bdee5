"""Health status used by the API health-check."""

from backend.config import Settings


def get_health_status(settings: Settings) -> tuple[str, str]:
    """Return the (status, message) pair reported by /api/health."""
    if settings.email_configured:
        return "OK", "Service is running"
    return "OK", "Service is running; email delivery is not configured"
