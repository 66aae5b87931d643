class LimiterError(Exception):
    """Raised when a permit is misused (e.g. released twice)."""
