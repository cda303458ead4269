"""Infrastructure layer - logging and external service adapters."""
