"""Database and other infrastructure adapters."""
