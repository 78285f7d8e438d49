"""Utility modules for kubedrift."""
