"""Site configuration for docsite.

Settings come from defaults, an optional YAML file and ``DOCSITE_*``
environment variables, in increasing order of precedence.
"""

import os
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_DOCS_PATH = os.path.join("docs", "main.md")
DEFAULT_MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc"]


class RenderMode(str, Enum):
    """How the document body is turned into page content."""
    COMPILED = "compiled"
    VERBATIM = "verbatim"


class SiteSettings(BaseModel):
    """Settings for the documentation page."""
    docs_path: str = Field(default=DEFAULT_DOCS_PATH, description="Markdown source, relative to the working directory")
    render_mode: RenderMode = Field(default=RenderMode.COMPILED, description="Compiled markdown or verbatim text")
    show_path: bool = Field(default=True, description="Show the attempted path in the error view")
    check_exists: bool = Field(default=True, description="Check the file exists before reading")
    environment: str = Field(default="development", description="Runtime mode, development or production")

    # Page shell
    site_title: str = Field(default="DevOps System Documentation", description="Fallback page title")
    site_description: str = Field(default="Technical documentation for DevOps system", description="Meta description")
    lang: str = Field(default="zh", description="Document language attribute")
    markdown_extensions: List[str] = Field(default_factory=lambda: list(DEFAULT_MARKDOWN_EXTENSIONS))

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Emit JSON log lines on the console")
    log_file: Optional[str] = Field(default=None, description="Optional JSON log file")

    @property
    def is_development(self) -> bool:
        return self.environment != "production"

    @classmethod
    def from_env(cls, base: Optional[Dict[str, Any]] = None) -> 'SiteSettings':
        """Create settings from environment variables layered over ``base``."""
        values: Dict[str, Any] = dict(base or {})

        env_map = {
            'DOCSITE_DOCS_PATH': 'docs_path',
            'DOCSITE_RENDER_MODE': 'render_mode',
            'DOCSITE_SHOW_PATH': 'show_path',
            'DOCSITE_CHECK_EXISTS': 'check_exists',
            'ENVIRONMENT': 'environment',
            'DOCSITE_SITE_TITLE': 'site_title',
            'DOCSITE_SITE_DESCRIPTION': 'site_description',
            'DOCSITE_LANG': 'lang',
            'DOCSITE_LOG_LEVEL': 'log_level',
            'DOCSITE_LOG_JSON': 'log_json',
            'DOCSITE_LOG_FILE': 'log_file',
        }
        for env_key, field_name in env_map.items():
            value = os.getenv(env_key)
            if value is not None and value != "":
                values[field_name] = value.lower() if field_name in ('render_mode', 'environment') else value

        extensions = os.getenv('DOCSITE_MARKDOWN_EXTENSIONS')
        if extensions:
            values['markdown_extensions'] = [ext.strip() for ext in extensions.split(",") if ext.strip()]

        return cls(**values)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _get_default_config_path() -> Optional[str]:
    possible_paths = [
        os.environ.get('DOCSITE_CONFIG'),
        os.path.join(os.getcwd(), 'config', 'site.yaml'),
    ]
    for path in possible_paths:
        if path and os.path.exists(path):
            return path
    return None


def load_yaml_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load the optional YAML settings file.

    A missing file yields an empty mapping. A file that is not a YAML
    mapping raises ``ValueError``.
    """
    path = config_path or _get_default_config_path()
    if not path:
        return {}
    if not os.path.exists(path):
        logger.info(f"Site config file not found at {path}, using defaults")
        return {}

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Site config {path} must be a mapping, got {type(data).__name__}")

    logger.debug(f"Loaded site config from {path}")
    return data


def load_settings(config_path: Optional[str] = None, **overrides: Any) -> SiteSettings:
    """Build settings from YAML file, environment, then explicit overrides."""
    file_config = load_yaml_config(config_path)
    settings = SiteSettings.from_env(base=file_config)
    if overrides:
        settings = SiteSettings(**_deep_merge(settings.model_dump(), overrides))
    return settings
