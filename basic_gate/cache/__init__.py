"""Time-expiring cache used by the cached gate."""
