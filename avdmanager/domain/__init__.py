"""Domain layer: entities and pure business rules."""
