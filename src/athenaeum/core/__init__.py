"""Cross-cutting concerns: logging, operation context and time."""
