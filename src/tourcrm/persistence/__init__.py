"""Local snapshot and remote document store persistence."""
