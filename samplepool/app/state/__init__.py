"""Observable application state."""
