"""Shared models, store and repositories for the dashboard backend."""
