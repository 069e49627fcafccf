"""Domain models for gitboard."""
