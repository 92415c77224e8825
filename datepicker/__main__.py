"""Entry point for `python -m datepicker`."""

import sys

from datepicker.cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
