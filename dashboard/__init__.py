"""Order summary dashboard: HTTP API plus export and preview services."""
