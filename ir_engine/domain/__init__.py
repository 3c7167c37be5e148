"""Domain layer: models and tax rules."""
