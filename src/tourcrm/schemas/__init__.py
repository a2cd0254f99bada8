"""API and payload schemas."""
