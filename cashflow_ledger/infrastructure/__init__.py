"""Infrastructure adapters: storage, configuration, logging."""
