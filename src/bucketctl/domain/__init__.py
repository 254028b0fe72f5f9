"""Domain layer: the bucket aggregate, its errors, and query descriptors.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""
