"""Domain layer: transaction entities, services and error taxonomy."""
