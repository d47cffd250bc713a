"""Cross-cutting concerns: logging and configuration."""
