from datetime import datetime
from pathlib import Path

from loguru import logger

# `record` is bound by the export pipeline; everything else logs "-"
LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[record]} | "
    "{name}:{function}:{line} - {message}"
)


def setup_logging(root: str, level: str = "INFO", retention: str = "14 days"):
    """Send logs to <root>/YYYY/MM/DD/healthdoc.log and the console."""
    logdir = Path(root) / datetime.now().strftime("%Y/%m/%d")
    logdir.mkdir(parents=True, exist_ok=True)
    logger.remove()
    logger.configure(extra={"record": "-"})
    logger.add(
        str(logdir / "healthdoc.log"),
        format=LOG_FORMAT,
        rotation="00:00",
        retention=retention,
        level=level,
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )
    logger.add(lambda m: print(m, end=""), format=LOG_FORMAT, level=level)
    return logger
