"""
Starter kit todo service.

Contains the FastAPI worker (starterkit.main.create_app), the SQLAlchemy
schema, an HTTP API client and the client-side todo list and wizard state.
"""

__version__ = "0.1.0"
