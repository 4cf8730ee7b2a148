"""Core query translation components."""
