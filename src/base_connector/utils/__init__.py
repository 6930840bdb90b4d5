"""Utility modules for the base connector."""
