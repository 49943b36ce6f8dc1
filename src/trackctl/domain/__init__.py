"""Domain layer — records, timestamps, validation, and durations.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
