"""Configuration module for SaveJobs."""

from savejobs.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
