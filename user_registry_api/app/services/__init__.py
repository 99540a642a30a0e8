"""
Service layer abstraction.

Each service encapsulates business logic for a concern.  Handlers call
into services and never talk to MongoDB or the echo endpoint directly.
"""
