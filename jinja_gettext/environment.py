"""
Jinja2 environment that writes compiled templates to an on-disk cache.

The compiled form of a Jinja2 template is plain Python source, which is what
gets handed to xgettext instead of the raw template markup. Jinja2 routes every
call through ``context.call(...)``, so each cache file starts with plain
``gettext``/``ngettext``/``pgettext`` calls placed on the template's own line
numbers, which xgettext's default keywords pick up.
"""

import hashlib
import logging
import os
import tempfile
import uuid
from typing import Iterable, Optional

from jinja2 import Environment
from jinja2.ext import GETTEXT_FUNCTIONS, extract_from_ast

logger = logging.getLogger(__name__)


def _passthrough_filter(value, *args, **kwargs):
    return value


def _always_true_test(value, *args, **kwargs):
    return True


def _empty_global(*args, **kwargs):
    return ''


def translation_calls(ast) -> str:
    """Render the gettext calls of a parsed template, one source line per template line.

    Calls sharing a template line are joined with ``;``. Non-constant arguments
    (e.g. the count of a plural) become ``None``.
    """
    lines = {}
    for lineno, funcname, message in extract_from_ast(ast, GETTEXT_FUNCTIONS):
        args = message if isinstance(message, tuple) else (message,)
        lines.setdefault(lineno, []).append(f"{funcname}({', '.join(repr(a) for a in args)})")

    if not lines:
        return ''
    return ''.join('; '.join(lines.get(n, ())) + '\n' for n in range(1, max(lines) + 1))


class CachingEnvironment(Environment):
    """Environment exposing the template compilation contract used by the extractor."""

    def __init__(self, cache: Optional[str] = None, stubs: Iterable[str] = (), **options):
        super().__init__(**options)
        # ``self.cache`` is Jinja's in-memory template cache, keep the directory apart
        if cache is None:
            cache = os.path.join(tempfile.gettempdir(), f'jinja-gettext-{uuid.uuid4().hex}')
        self.cache_dir = os.path.abspath(cache)
        self.add_stubs(stubs)

    def add_stubs(self, names: Iterable[str]):
        """Register no-op filters, tests and globals for names the environment doesn't know."""
        for name in names:
            self.filters.setdefault(name, _passthrough_filter)
            self.tests.setdefault(name, _always_true_test)
            self.globals.setdefault(name, _empty_global)

    def get_cache(self) -> str:
        return self.cache_dir

    def get_cache_filename(self, name: str) -> str:
        digest = hashlib.sha256(name.encode('utf-8')).hexdigest()
        return os.path.join(self.cache_dir, digest[:2], f'{digest}.py')

    def load_template(self, name: str):
        """Compile a template and write the generated Python source to its cache file.

        Raises:
            jinja2.TemplateNotFound: the loader cannot resolve ``name``
            jinja2.TemplateSyntaxError: the template does not compile
        """
        if self.loader is None:
            raise TypeError('no loader for this environment specified')
        source, filename, _ = self.loader.get_source(self, name)

        ast = self.parse(source, name, filename)
        calls = translation_calls(ast)
        code = self.compile(ast, name, filename, raw=True)

        cache_filename = self.get_cache_filename(name)
        os.makedirs(os.path.dirname(cache_filename), exist_ok=True)
        with open(cache_filename, 'w', encoding='utf-8') as f:
            f.write(calls)
            f.write(code)
        logger.debug(f"Compiled {name} -> {cache_filename}")
