import logging
from typing import Optional

from .config import ConfigError, apply_timezone, load_config, load_logging_settings
from .logging_utils import setup_logger
from .models.settings_models import ConfigurationSettings

logger = logging.getLogger("classgen")


def bootstrap(env_file: Optional[str] = ".env") -> ConfigurationSettings:
    """
    Start-up sequence: logging, configuration, process timezone.
    The returned settings are what callers hand to the generator.
    """
    logging_settings = load_logging_settings(env_file)
    setup_logger(level=logging_settings.log_level, log_dir=logging_settings.log_dir)

    settings = load_config(env_file=env_file)
    apply_timezone(settings)
    logger.info("Process timezone set to %s", settings.timezone)
    return settings


def main(env_file: Optional[str] = ".env") -> int:
    try:
        settings = bootstrap(env_file)
    except ConfigError as exc:
        logger.error("Invalid configuration, aborting start-up | %s", exc)
        return 2

    logger.info(
        "Ready | generation_mode=%s access_method=%s accessors=%s",
        settings.generation_mode.value,
        settings.access_method.value,
        settings.generates_accessors,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
