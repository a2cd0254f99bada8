"""Engine services."""
