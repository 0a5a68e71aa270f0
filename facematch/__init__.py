"""Face photo quality validation and partner matching."""
