"""Configuration."""

from .settings import JiraSettings, Settings

__all__ = ["JiraSettings", "Settings"]
