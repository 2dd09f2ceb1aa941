"""Shared infrastructure for the named timer registry."""
