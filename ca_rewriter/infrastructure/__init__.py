"""Infrastructure layer: configuration, external services and messaging."""
