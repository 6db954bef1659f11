"""Core data types, payload loading and topology."""
