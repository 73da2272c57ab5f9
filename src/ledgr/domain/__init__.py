"""Domain layer: repository contracts consumed by services and views."""
