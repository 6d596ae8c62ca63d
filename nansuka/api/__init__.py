"""Edge proxy HTTP API."""
