"""Logging setup."""
import logging
from logging.config import dictConfig


def init_logging(app):
    """Structured JSON logs in production; plain console logs elsewhere."""
    level = (app.config.get('LOG_LEVEL') or 'INFO').upper()
    if not app.debug and not app.testing:
        dictConfig({
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': 'pythonjsonlogger.json.JsonFormatter',
                    'fmt': '%(asctime)s %(levelname)s %(name)s %(message)s',
                    'static_fields': {'service': 'quote-server'},
                },
            },
            'handlers': {'wsgi': {'class': 'logging.StreamHandler', 'formatter': 'json'}},
            'root': {'level': level, 'handlers': ['wsgi']},
        })
    app.logger.setLevel(getattr(logging, level, logging.INFO))
