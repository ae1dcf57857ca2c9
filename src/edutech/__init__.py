"""Scaffolding and lifecycle management for edutech portal workspaces."""
