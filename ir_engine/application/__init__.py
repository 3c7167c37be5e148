"""Application layer: orchestration and boundary services."""
