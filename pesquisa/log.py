import sys
from typing import Optional

from loguru import logger


def setup_logging(level: str = "INFO", log_file: Optional[str] = "logs/app.log") -> None:
    """
    Configura o loguru: stderr + arquivo com rotação semanal.
    Nas páginas Streamlit é chamado via st.cache_resource (uma vez por processo).
    """
    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_file:
        logger.add(log_file, rotation="1 week", retention="4 weeks", level=level)
