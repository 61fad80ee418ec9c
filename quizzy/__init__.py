"""Quiz attempt scoring and performance analytics."""
