"""Shared helpers for quickfind."""
