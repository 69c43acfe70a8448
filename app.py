import os
from pathlib import Path
import logging
import logging.config

from flask import Flask

from config import (
    APP_SECRET_KEY,
    LOG_FILE,
    get_data_source,
    is_remote_source,
    sample_data_fallback_enabled,
)
from achievements import catalog as achievements_catalog
from achievements import loader as achievements_loader
from achievements.presentation import build_game_payload
from achievements.sample import sample_raw_data
from init import initialize_app
from web.app_factory import create_app

logger = logging.getLogger(__name__)


def _determine_log_level(flask_app: Flask) -> int:
    if flask_app.debug:
        return logging.DEBUG
    env_value = str(flask_app.config.get('ENV', '')).lower()
    if env_value == 'development':
        return logging.DEBUG
    if os.environ.get('FLASK_DEBUG', '').lower() in {'1', 'true', 'yes', 'on'}:
        return logging.DEBUG
    return logging.INFO


def _configure_logging(flask_app: Flask) -> None:
    log_level = _determine_log_level(flask_app)
    log_path = Path(LOG_FILE)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass

    for handler in list(flask_app.logger.handlers):
        flask_app.logger.removeHandler(handler)

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'standard': {
                    'format': '%(asctime)s %(levelname)s [%(name)s] %(message)s',
                    'datefmt': '%Y-%m-%d %H:%M:%S',
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'standard',
                    'level': log_level,
                    'stream': 'ext://sys.stdout',
                },
                'file': {
                    'class': 'logging.handlers.RotatingFileHandler',
                    'formatter': 'standard',
                    'level': logging.DEBUG,
                    'filename': os.fspath(log_path),
                    'maxBytes': 5 * 1024 * 1024,
                    'backupCount': 5,
                    'encoding': 'utf-8',
                },
            },
            'root': {
                'level': log_level,
                'handlers': ['console', 'file'],
            },
        }
    )

    flask_app.logger = logging.getLogger(flask_app.import_name)
    flask_app.logger.setLevel(log_level)
    logger.setLevel(log_level)


catalog_state = achievements_catalog.CatalogState(logger=logger)

app = create_app(
    get_catalog=lambda: catalog_state,
    build_game_payload=build_game_payload,
    secret_key=APP_SECRET_KEY,
    import_name=__name__,
)

_configure_logging(app)


def check_data_source() -> None:
    source = get_data_source()
    if not is_remote_source(source) and not os.path.isdir(source):
        logger.warning("Data directory %s does not exist", source)


def load_games():
    return achievements_loader.load_games(get_data_source())


def reload_catalog() -> int:
    """Reload every platform file into ``catalog_state``."""

    return initialize_app(
        check_data_source=check_data_source,
        load_games=load_games,
        set_games=catalog_state.set_games,
        mark_unavailable=catalog_state.mark_unavailable,
        fallback_data=sample_raw_data if sample_data_fallback_enabled() else None,
    )


# initial load
reload_catalog()


if __name__ == '__main__':
    app.run(debug=True)
