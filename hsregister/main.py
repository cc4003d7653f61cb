"""
Console entry point for `ic`.

Usage errors exit 1. A storage failure is logged and reported on
stderr, and the process exits 2.
"""

import sys
from typing import Optional, Sequence

import structlog

from hsregister.audit import configure_logging
from hsregister.config import get_settings
from hsregister.orchestrator import create_register_flow
from hsregister.services.storage import StorageError


EXIT_STORAGE_FAILURE = 2

logger = structlog.get_logger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run `ic` with the given arguments (defaults to sys.argv[1:])."""
    if argv is None:
        argv = sys.argv[1:]

    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)

    flow = create_register_flow(settings)
    try:
        return flow.run(argv)
    except StorageError as e:
        logger.error("ledger_operation_failed", error=str(e), db_path=str(settings.db_path))
        print(f"ic: {e}", file=sys.stderr)
        return EXIT_STORAGE_FAILURE


if __name__ == "__main__":
    sys.exit(main())
