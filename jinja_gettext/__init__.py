from jinja2 import FileSystemLoader

from jinja_gettext.config import Config
from jinja_gettext.environment import CachingEnvironment
from jinja_gettext.extractor import ExtractionFailed, Extractor, escape_parameter, format_command

__version__ = '1.0.0'

__all__ = [
    'CachingEnvironment',
    'Config',
    'ExtractionFailed',
    'Extractor',
    'create_environment',
    'escape_parameter',
    'format_command',
]


def create_environment(config=None):
    """Build the template environment described by ``config`` (settings from the environment by default)."""
    if config is None:
        config = Config()

    return CachingEnvironment(
        cache=config.CACHE_DIR,
        stubs=config.STUB_NAMES,
        loader=FileSystemLoader(config.TEMPLATE_SEARCH_PATH),
        extensions=config.JINJA_EXTENSIONS,
    )
