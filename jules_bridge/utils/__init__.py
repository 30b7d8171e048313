"""Shared helpers: logging setup and async subprocess execution."""
