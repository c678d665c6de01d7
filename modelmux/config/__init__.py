"""Configuration: settings, model catalog, providers and the model factory."""
