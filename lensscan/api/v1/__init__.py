"""API v1: routers and dependency wiring."""
