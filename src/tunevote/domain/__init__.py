"""Domain layer: business logic built on the core infrastructure."""
