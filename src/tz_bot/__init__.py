"""
TZ Bot - A Discord bot converting times mentioned in chat between timezones.
"""

import asyncio
import logging
import sys

from .main import main as async_main


def main() -> None:
    """Synchronous entry point that runs the async main function."""
    try:
        asyncio.run(async_main())
    except KeyboardInterrupt:
        logger = logging.getLogger(__name__)
        logger.info("Bot stopped by user")
    except Exception as e:
        # Logging may not be set up yet
        print(f"Failed to start bot: {e}", file=sys.stderr)
        sys.exit(1)


__all__ = ["main"]
