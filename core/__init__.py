"""Core application plumbing: configuration, logging, errors, dependencies."""
