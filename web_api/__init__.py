"""HTTP API for the student review generator."""
