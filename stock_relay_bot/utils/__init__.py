"""
Shared helpers for validation and Discord embeds.
"""
