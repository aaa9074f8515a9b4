"""Configuration, logging, database helpers and the error taxonomy."""
