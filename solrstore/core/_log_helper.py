import logging

logger = logging.getLogger("solrstore")


def debug(message: str, *args) -> None:
    logger.debug(message, *args)


def info(message: str, *args) -> None:
    logger.info(message, *args)


def warn(message: str, *args) -> None:
    logger.warning(message, *args)


def error(message: str, *args) -> None:
    logger.error(message, *args)
