"""Allow ``python -m notion_mail``."""

import sys

from notion_mail.cli.shell import main

sys.exit(main())
