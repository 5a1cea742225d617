"""Assessment pipeline modules."""
