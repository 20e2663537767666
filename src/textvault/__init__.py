# PUBLIC_INTERFACE
"""
Text Vault package.

Stores text documents encrypted at rest with a key derived from each
document's textId and the server secret. The FastAPI application factory
lives in ``textvault.api.main``.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
