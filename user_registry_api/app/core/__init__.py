"""
Core infrastructure: settings, logging setup and the MongoDB store.
"""
