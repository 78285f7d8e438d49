"""Data models for kubedrift."""
