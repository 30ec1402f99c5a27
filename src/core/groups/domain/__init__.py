"""Domain layer for the groups context: aggregates, value objects, events and rules."""
