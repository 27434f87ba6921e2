"""NumPy implementations of the seqdnn engine."""
