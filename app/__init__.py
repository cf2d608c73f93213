"""Application layer - models, repositories, services."""
