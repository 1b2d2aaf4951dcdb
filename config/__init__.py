"""Configuration module for docsite.

Provides site settings loaded from YAML and the environment.
"""

from .settings import (
    SiteSettings,
    RenderMode,
    DEFAULT_DOCS_PATH,
    load_settings,
    load_yaml_config
)

__all__ = [
    'SiteSettings',
    'RenderMode',
    'DEFAULT_DOCS_PATH',
    'load_settings',
    'load_yaml_config'
]
