#!/usr/bin/env python
"""
Extract translatable strings from Jinja2 templates with xgettext.

Usage: jinja-gettext-extractor [xgettext options] --files <template> [<template> ...]

Everything before --files is handed to xgettext unchanged, e.g.

    jinja-gettext-extractor --force-po -o messages.pot --files templates/*.html
"""
import argparse
import logging
import os
import sys

from babel.messages.pofile import PoFileError
from jinja2 import TemplateNotFound, TemplateSyntaxError

from jinja_gettext import create_environment
from jinja_gettext.catalog import count_messages, find_output_path
from jinja_gettext.config import Config
from jinja_gettext.extractor import ExtractionFailed, Extractor
from jinja_gettext.log import configure_logging

logger = logging.getLogger(__name__)

FILES_MARKER = '--files'


def build_parser():
    parser = argparse.ArgumentParser(
        prog='jinja-gettext-extractor',
        usage='%(prog)s [xgettext options] --files <template> [<template> ...]',
        description='Compile Jinja2 templates and extract translatable strings with xgettext.',
        epilog='Options before --files are passed to xgettext as they are.',
    )
    parser.add_argument('templates', nargs='+', metavar='template',
                        help='Template files, relative to the current directory or absolute')
    return parser


def split_arguments(argv, parser):
    """Split the command line into xgettext parameters and template paths."""
    if FILES_MARKER not in argv:
        parser.error(f'missing {FILES_MARKER}')

    index = argv.index(FILES_MARKER)
    args = parser.parse_args(argv[index + 1:])
    return argv[:index], [os.path.abspath(path) for path in args.templates]


def main(argv=None, config=None):
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()

    if FILES_MARKER not in argv and any(a in ('-h', '--help') for a in argv):
        parser.print_help()
        return 0

    parameters, templates = split_arguments(argv, parser)

    if config is None:
        config = Config()
    configure_logging(config.LOG_LEVEL, json=config.LOG_JSON)

    with Extractor(create_environment(config), binary=config.XGETTEXT_BINARY) as extractor:
        try:
            for template in templates:
                extractor.add_template(template)
        except TemplateNotFound as e:
            logger.error(f"Template not found: {e}")
            return 1
        except TemplateSyntaxError as e:
            logger.error(f"Template {e.filename or e.name} does not compile (line {e.lineno}): {e.message}")
            return 1

        extractor.set_gettext_parameters(parameters)
        try:
            extractor.extract()
        except ExtractionFailed as e:
            logger.error(str(e))
            return e.returncode if e.returncode > 0 else 1

    output = find_output_path(parameters)
    if output and os.path.exists(output):
        try:
            count = count_messages(output)
        except (OSError, ValueError, PoFileError) as e:
            logger.warning(f"Could not read catalog {output}: {e}")
        else:
            logger.info(f"Extracted {count} messages from {len(templates)} templates into {output}")
            return 0
    logger.info(f"Extracted messages from {len(templates)} templates")
    return 0


if __name__ == '__main__':
    sys.exit(main())
