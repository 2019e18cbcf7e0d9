"""UI adapters driving bufcycle from real key events."""
