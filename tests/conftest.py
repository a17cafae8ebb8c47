import logging
import subprocess

import pytest
from jinja2 import FileSystemLoader

from jinja_gettext.environment import CachingEnvironment
from jinja_gettext.extractor import Extractor


@pytest.fixture
def templates_dir(tmp_path):
    """A small template tree with translatable strings."""
    root = tmp_path / 'templates'
    root.mkdir()
    (root / 'base.html').write_text(
        '<title>{{ _("Library") }}</title>{% block content %}{% endblock %}', encoding='utf-8')
    (root / 'index.html').write_text(
        '{% extends "base.html" %}{% block content %}'
        '{% trans %}Welcome back{% endtrans %}{% endblock %}', encoding='utf-8')
    (root / 'plural.html').write_text(
        '<p>\n'
        '{% trans count=books|length %}One book{% pluralize %}{{ count }} books{% endtrans %}\n'
        '{{ pgettext("menu", "Open") }} {{ url_for("index") }}</p>\n', encoding='utf-8')
    (root / 'broken.html').write_text('{% if user %}{{ _("Hi") }}', encoding='utf-8')
    return root


@pytest.fixture
def environment(tmp_path, templates_dir):
    """Environment with its cache inside the test's temp dir."""
    return CachingEnvironment(
        cache=str(tmp_path / 'cache'),
        loader=FileSystemLoader('/'),
        extensions=['jinja2.ext.i18n'],
    )


class FakeEnvironment:
    """Engine stand-in that records compiled templates without touching disk."""

    def __init__(self, cache='/cache'):
        self.cache = cache
        self.loaded = []

    def load_template(self, path):
        self.loaded.append(path)

    def get_cache_filename(self, path):
        return f"{self.cache}/{path.strip('/').replace('/', '_')}.py"

    def get_cache(self):
        return self.cache


@pytest.fixture
def fake_environment(tmp_path):
    return FakeEnvironment(cache=str(tmp_path / 'fake-cache'))


@pytest.fixture
def extractor(fake_environment):
    with Extractor(fake_environment) as ex:
        yield ex


class RunRecorder:
    """Replacement for subprocess.run returning a canned result."""

    def __init__(self, returncode=0, stdout=''):
        self.returncode = returncode
        self.stdout = stdout
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append((list(args), kwargs))
        return subprocess.CompletedProcess(args, self.returncode, stdout=self.stdout)


@pytest.fixture
def fake_run(monkeypatch):
    recorder = RunRecorder()
    monkeypatch.setattr(subprocess, 'run', recorder)
    return recorder


@pytest.fixture(autouse=True)
def reset_package_logger():
    """configure_logging() attaches handlers to the package logger; drop them between tests."""
    yield
    logger = logging.getLogger('jinja_gettext')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
