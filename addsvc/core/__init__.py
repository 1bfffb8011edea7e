"""Process-wide plumbing: configuration and logging."""
