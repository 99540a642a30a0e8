"""
API package containing versioned routes.

``v1`` exposes a top‑level ``router`` that the application includes
without a path prefix.
"""
