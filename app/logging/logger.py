import logging
import os
from logging.handlers import RotatingFileHandler


LOG_FORMAT   = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'
ERROR_FORMAT = LOG_FORMAT + '\n    at %(pathname)s:%(lineno)d'

# Store, QR, mail and workflow loggers all live under this name
PIPELINE_LOGGER = 'app.services'

# Per-statement SQL and PNG plugin chatter stay out of the files
QUIET_LOGGERS = ('sqlalchemy.engine', 'PIL')


def _file_handler(app, log_dir, filename, level, fmt):
    handler = RotatingFileHandler(
        os.path.join(log_dir, filename),
        maxBytes=app.config.get('LOG_MAX_BYTES', 10 * 1024 * 1024),
        backupCount=app.config.get('LOG_BACKUP_COUNT', 3),
        encoding='utf-8',
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    handler.registration_log = True
    return handler


def _detach_previous(logger):
    for handler in [h for h in logger.handlers if getattr(h, 'registration_log', False)]:
        logger.removeHandler(handler)
        handler.close()


def setup_logging(app):
    """
    Attach rotating log files under LOG_DIR.

    app.log            the app package at LOG_LEVEL
    error.log          ERROR and above, with the source location
    registrations.log  the registration pipeline only (app.services.*)

    A console handler is added in debug. Calling this again swaps out the
    handlers of the previous call. Returns the handlers it attached.
    """
    log_dir = app.config.get('LOG_DIR', 'logs')
    level   = app.config.get('LOG_LEVEL', 'INFO').upper()
    os.makedirs(log_dir, exist_ok=True)

    pipeline_logger = logging.getLogger(PIPELINE_LOGGER)
    _detach_previous(app.logger)
    _detach_previous(pipeline_logger)

    app_handlers = [
        _file_handler(app, log_dir, 'app.log', level, LOG_FORMAT),
        _file_handler(app, log_dir, 'error.log', logging.ERROR, ERROR_FORMAT),
    ]
    if app.debug:
        console = logging.StreamHandler()
        console.setLevel(logging.DEBUG)
        console.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
        console.registration_log = True
        app_handlers.append(console)

    # app.logger is the "app" package logger; app.services.* propagate into it
    for handler in app_handlers:
        app.logger.addHandler(handler)
    app.logger.setLevel(level)

    pipeline_handler = _file_handler(app, log_dir, 'registrations.log', level, LOG_FORMAT)
    pipeline_logger.addHandler(pipeline_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    app.logger.info('Event registration service started (log level %s)', level)
    return app_handlers + [pipeline_handler]
