"""Domain value types shared by the core and the UI adapters."""
