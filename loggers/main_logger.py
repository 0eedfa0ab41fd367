import logging
from pathlib import Path
from typing import Optional, Union

p = Path(__file__).resolve()

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Create a custom logger; sinks are attached by the CLI only
main_logger = logging.getLogger("manifest_report")
main_logger.addHandler(logging.NullHandler())


def close_main_logger() -> None:
    """Flush and detach every sink the CLI attached."""
    for handler in list(main_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            handler.flush()
            main_logger.removeHandler(handler)
            handler.close()


def configure_main_logger(level: Union[int, str] = logging.INFO, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    # Drop handlers from a previous call so repeated runs don't duplicate output
    close_main_logger()

    main_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    # Console goes to stderr; stdout may carry the report
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    main_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(Path(log_file), mode='w', encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        main_logger.addHandler(file_handler)

    return main_logger
