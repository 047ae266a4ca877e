"""
HTTP API for the topic catalog.
"""

from .app import create_app, create_app_from_env, run_server

__all__ = ["create_app", "create_app_from_env", "run_server"]
