"""Application layer - Ports and use cases."""
