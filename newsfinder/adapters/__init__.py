"""Adapters connecting the core services to the outside world."""
