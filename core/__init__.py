"""Core business logic for the student review generator."""
