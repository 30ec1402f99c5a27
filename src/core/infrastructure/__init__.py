"""Cross-cutting infrastructure: settings, logging and database primitives."""
