"""In-process data collections."""
