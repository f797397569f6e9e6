import logging

from videowalker.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """
    Configures application logging once.
    Level comes from LOG_LEVEL (INFO by default); unknown names fall back to INFO.
    """
    name = (level or settings.LOG_LEVEL or "INFO").strip().upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger("videowalker").setLevel(numeric)
