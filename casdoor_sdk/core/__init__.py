"""Casdoor SDK core: HTTP dispatch, envelope resolution and resource services."""
