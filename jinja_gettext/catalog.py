"""Helpers for the catalog written by xgettext."""

import os
from typing import Optional, Sequence

from babel.messages.pofile import read_po


def find_output_path(parameters: Sequence[str]) -> Optional[str]:
    """Work out where xgettext will write the catalog from its parameters.

    Returns None when no output file is given or the catalog goes to stdout.
    """
    output = None
    output_dir = None

    i = 0
    while i < len(parameters):
        param = parameters[i]
        following = parameters[i + 1] if i + 1 < len(parameters) else None

        if param in ('-o', '--output'):
            output = following
            i += 1
        elif param.startswith('--output='):
            output = param[len('--output='):]
        elif param.startswith('-o') and not param.startswith('--'):
            output = param[2:]
        elif param in ('-p', '--output-dir'):
            output_dir = following
            i += 1
        elif param.startswith('--output-dir='):
            output_dir = param[len('--output-dir='):]
        elif param.startswith('-p') and not param.startswith('--'):
            output_dir = param[2:]
        i += 1

    if not output or output == '-':
        return None
    if output_dir and not os.path.isabs(output):
        return os.path.join(output_dir, output)
    return output


def count_messages(path: str) -> int:
    """Number of messages in a PO/POT file, not counting the header."""
    with open(path, 'r', encoding='utf-8') as f:
        catalog = read_po(f)
    return len(catalog)
