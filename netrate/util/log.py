import logging
from pathlib import Path


class LevelTagFormatter(logging.Formatter):
    def format(self, record):
        record.level_tag = f"[{record.levelname}]"
        return super().format(record)


def configure(debug: bool, name: str, logfile: Path) -> logging.Logger:
    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Logs go only to the file, never to stdout where the JSON goes
    logger.propagate = False

    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return logger

    handler = logging.FileHandler(logfile, mode="a", encoding="utf-8")
    handler.setLevel(level)
    formatter = LevelTagFormatter(
        "%(asctime)s %(level_tag)s %(name)s.%(funcName)s - %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
