"""
Version 1 of the API.

This subpackage bundles the user endpoints.  Routes are served without
a version prefix (``/users``) to keep the public paths stable.
"""
