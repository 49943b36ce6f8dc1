"""Infrastructure layer — log file access and the interval log engine.

This layer may import from the domain layer (infrastructure -> domain).
It must never import from services, commands, or output.
"""
