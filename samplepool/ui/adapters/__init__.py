"""Qt adapters implementing the application ports."""
