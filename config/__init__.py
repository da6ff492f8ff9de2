"""Top-level package for Django configuration.

This package contains settings modules for different environments and
entry points for WSGI and ASGI.
"""
