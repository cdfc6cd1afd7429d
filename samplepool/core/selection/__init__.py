"""Selection rules for click and keyboard interaction."""
