"""Core configuration, security and time helpers."""
