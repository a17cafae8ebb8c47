"""
Extracts translations from Jinja2 templates.

Templates are compiled to Python source by the environment, then xgettext is run
against the compiled cache files.
"""

import logging
import shlex
import shutil
import subprocess
from typing import Iterable, List

logger = logging.getLogger(__name__)

# Return code reported by POSIX shells for a command that cannot be found
COMMAND_NOT_FOUND = 127


class ExtractionFailed(RuntimeError):
    """Raised when the gettext command exits with a non-zero status."""

    def __init__(self, command: str, returncode: int, output: str = ''):
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(
            f'Gettext command "{command}" failed with error code {returncode} and output: {output}')


def escape_parameter(param: str) -> str:
    """Escape an argument or option so it can be pasted into a shell.

    For example ``--copyright-holder=Zip Recipes`` becomes
    ``--copyright-holder='Zip Recipes'``. Positional arguments are quoted whole,
    bare flags are returned as they are.
    """
    if not param.startswith('-'):
        return shlex.quote(param)

    name, sep, value = param.partition('=')
    if sep:
        return f'{name}={shlex.quote(value)}'

    return param


def format_command(binary: str, parameters: Iterable[str], templates: Iterable[str]) -> str:
    """Render the command line the way it would be typed in a shell."""
    tokens = [binary]
    tokens.extend(escape_parameter(p) for p in parameters)
    tokens.extend(escape_parameter(t) for t in templates)
    return ' '.join(tokens)


class Extractor:
    """Collects compiled templates and gettext parameters, then runs xgettext over them.

    The extractor owns the environment's cache directory and removes it on
    ``close()``; use it as a context manager to make sure that happens::

        with Extractor(create_environment()) as extractor:
            extractor.add_template('/srv/app/templates/index.html')
            extractor.set_gettext_parameters(['--force-po', '-o', 'messages.pot'])
            extractor.extract()
    """

    def __init__(self, environment, binary: str = 'xgettext'):
        self.environment = environment
        self.binary = binary
        self.templates: List[str] = []
        self.parameters: List[str] = []
        self._closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def reset(self):
        self.templates = []
        self.parameters = []

    def add_template(self, path: str):
        """Compile a template and remember its cache file.

        Template syntax errors from the environment are not caught.
        """
        self.environment.load_template(path)
        cache_filename = self.environment.get_cache_filename(path)
        self.templates.append(cache_filename)
        logger.debug(f"Added template {path} ({cache_filename})")

    def add_gettext_parameter(self, parameter: str):
        self.parameters.append(parameter)

    def set_gettext_parameters(self, parameters: Iterable[str]):
        self.parameters = list(parameters)

    @property
    def command(self) -> str:
        return format_command(self.binary, self.parameters, self.templates)

    def extract(self):
        """Run the gettext command over all added templates.

        State is reset afterwards whether or not the command succeeded.

        Raises:
            ExtractionFailed: the command exited with a non-zero status or could not be started
        """
        command = self.command
        args = [self.binary, *self.parameters, *self.templates]

        try:
            logger.info(f"Running {command}")
            try:
                result = subprocess.run(
                    args,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                )
            except OSError as e:
                raise ExtractionFailed(command, COMMAND_NOT_FOUND, str(e)) from e

            output = (result.stdout or '').strip()
            if result.returncode != 0:
                raise ExtractionFailed(command, result.returncode, output)

            # xgettext only prints diagnostics, e.g. skipped files or bad input
            if output:
                logger.warning(output)
        finally:
            self.reset()

    def close(self):
        """Remove the environment's cache directory. Only the first call does anything."""
        if self._closed:
            return
        self._closed = True

        cache = self.environment.get_cache()
        try:
            shutil.rmtree(cache)
            logger.debug(f"Removed template cache {cache}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove template cache {cache}: {e}")
