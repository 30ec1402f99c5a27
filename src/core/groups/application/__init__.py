"""Application layer for the groups context: rule services and use cases."""
