"""Shared helpers for envconf core."""
