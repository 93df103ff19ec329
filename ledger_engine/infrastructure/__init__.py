"""Infrastructure adapters: persistence, settings, clock, logging."""
