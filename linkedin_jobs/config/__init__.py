"""
Configuration module for the LinkedIn job query client.
"""

from linkedin_jobs.config.settings import settings, Settings, PROJECT_ROOT
from linkedin_jobs.config.searches import load_searches, load_yaml

__all__ = ["settings", "Settings", "PROJECT_ROOT", "load_searches", "load_yaml"]
