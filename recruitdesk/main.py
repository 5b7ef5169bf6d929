"""
RecruitDesk Main Entry Point

Initializes logging and configuration, checks the database, then hands
control to the command line interface.
"""

import sys
from typing import Optional


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for RecruitDesk.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        # Initialize logging first
        from recruitdesk.utils.logger import log, setup_logging

        setup_logging()
        log.info("Starting RecruitDesk...")

        from recruitdesk.utils.config import get_settings

        settings = get_settings()
        log.info(f"Environment: {settings.environment}")
        log.info(f"Debug mode: {settings.debug}")
        log.info(f"REST backend: {settings.api_base_url}")

        from recruitdesk.cli import app

        app(args=argv)
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 130
    except SystemExit as e:
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
