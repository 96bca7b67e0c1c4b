"""Settings, configuration, logging and structure adapters."""
