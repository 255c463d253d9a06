"""Infrastructure layer: HTTP integrations and observability."""
