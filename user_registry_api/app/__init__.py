"""
Application package initializer.

This package contains the main entrypoint for the user registry and
its submodules: configuration and persistence in ``core``, payload
models in ``schemas``, business logic in ``services`` and HTTP routes
in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
