"""Infrastructure adapters: database, HTTP, settings and logging."""
