"""Database engine adapters for the console."""
