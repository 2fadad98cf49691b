class ConfigurationError(RuntimeError):
    """Missing or invalid startup configuration. Never raised per log event."""
