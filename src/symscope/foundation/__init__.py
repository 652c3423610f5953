"""Foundation layer: configuration, logging and shared types."""
