"""Infrastructure layer: HTTP-backed repository implementations."""
