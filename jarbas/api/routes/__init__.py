"""Routers — users (accounts and profiles), goals, health probes."""
