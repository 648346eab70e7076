"""Database query functions. Each takes an open AsyncConnection first."""
