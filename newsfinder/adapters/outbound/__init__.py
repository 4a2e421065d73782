"""Outbound adapters: search backend and secondary news sources."""
