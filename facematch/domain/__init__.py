"""Domain models and interfaces."""
