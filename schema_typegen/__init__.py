"""Generates TypeScript types from a PostgreSQL database schema."""

__version__ = "0.1.0"
