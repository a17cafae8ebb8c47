import logging
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    # External extraction program
    XGETTEXT_BINARY: str = 'xgettext'

    # Compiled template cache. When unset, every run gets a fresh directory
    # under the system temp dir which is removed when the extractor closes.
    CACHE_DIR: Optional[str] = None

    # Templates are registered by absolute path, so the loader searches from /
    TEMPLATE_SEARCH_PATH: str = '/'

    # Jinja2 extensions loaded into the environment (i18n provides {% trans %})
    JINJA_EXTENSIONS: Union[List[str], str] = ['jinja2.ext.i18n']

    # Application-specific filters/tests/globals to stub out so that templates
    # using them still compile, e.g. STUB_NAMES=url_for,markdown
    STUB_NAMES: Union[List[str], str] = []

    # Logging (used by the command line tool)
    LOG_LEVEL: str = 'INFO'
    LOG_JSON: bool = False

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',  # Ignore extra fields from .env
    )

    @field_validator('JINJA_EXTENSIONS', 'STUB_NAMES', mode='before')
    def _split_names(cls, v):
        """Accept comma separated strings as well as JSON lists from the environment."""
        if v is None:
            return []
        if isinstance(v, str):
            return [part.strip() for part in v.split(',') if part.strip()]
        return list(v)

    @field_validator('LOG_LEVEL', mode='before')
    def _parse_log_level(cls, v):
        level = str(v or 'INFO').strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f'Unknown log level: {v}')
        return level
