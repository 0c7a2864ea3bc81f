"""Engine test suite."""
