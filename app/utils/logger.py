import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"

logger = logging.getLogger("voice-gateway")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logger.setLevel(level.upper())


def get_logger(name: str) -> logging.Logger:
    return logger.getChild(name)
