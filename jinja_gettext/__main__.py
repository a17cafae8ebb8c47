import sys

from jinja_gettext.cli import main

sys.exit(main())
