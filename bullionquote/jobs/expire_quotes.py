"""Standalone entry point for the expiry sweep, for cron.

    python -m bullionquote.jobs.expire_quotes
"""
import sys

from bullionquote import create_app
from bullionquote.services import ExpiryService


def main():
    app = create_app()
    with app.app_context():
        try:
            ExpiryService.expire_stale_quotes()
        except Exception:
            app.logger.exception('Expiry sweep failed; it will run again on the next schedule')
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
