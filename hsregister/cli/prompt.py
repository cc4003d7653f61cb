"""Interactive confirmation before the ledger is erased."""

from typing import TextIO

ERASE_WARNING = "This will ERASE the previous database if it exists!"
CONFIRM_QUESTION = "Are you sure you want to (re)create the database? (Y/n) "

ACCEPTED_RESPONSES = frozenset({"Y", "yes", "Yes"})


def confirm_setup(stdin: TextIO, stderr: TextIO) -> bool:
    """
    Ask before (re)creating the database.

    Only an exact `Y`, `yes` or `Yes` counts as consent. Anything else,
    including an empty line or end of input, declines.
    """
    print(ERASE_WARNING, file=stderr)
    print(CONFIRM_QUESTION, file=stderr)
    stderr.flush()
    response = stdin.readline()
    return response.rstrip("\r\n") in ACCEPTED_RESPONSES
