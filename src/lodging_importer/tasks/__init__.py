"""Import workflows."""
