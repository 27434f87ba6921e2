"""Backend-agnostic helpers shared by domain contracts."""
