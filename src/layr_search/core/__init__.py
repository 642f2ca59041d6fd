"""Core layer: Project Model, configuration, loading and errors."""
