"""Configuration layer — section models, file discovery, settings, logging."""
