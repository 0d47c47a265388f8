"""
Configuration package.

Exports the settings instance for easy importing.
"""

from jobdesc_rag.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
