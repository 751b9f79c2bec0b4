"""Core weather services."""
