# logger_conf.py
import logging

from textual.logging import TextualHandler

DEFAULT_LOG_FILE = "movie_search.log"

def get_logger(name: str = "movie-search", log_file: str = DEFAULT_LOG_FILE, level: str = "INFO"):
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)

    # no stream handler: the terminal belongs to the TUI
    fh = logging.FileHandler(log_file, encoding="utf-8", delay=True)
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    logger.addHandler(fh)

    # devtools console (`textual console`)
    logger.addHandler(TextualHandler())

    return logger
