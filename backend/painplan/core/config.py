import logging
import sys
from typing import Optional

from pydantic_settings import BaseSettings

from ..models.plan import ProcedureType


class Settings(BaseSettings):
    APP_NAME: str = "Wound Pain Management Decision Support"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Report text; None keeps the built-in disclaimer from the rule catalog
    LEGAL_DISCLAIMER: Optional[str] = None

    # Procedure assumed when pain is assessed in a procedural context
    # and the caller does not name one
    DEFAULT_PROCEDURE_TYPE: ProcedureType = ProcedureType.WOUND_DRESSING
    DEFAULT_PROCEDURE_DESCRIPTION: str = "Wound dressing change"

    AUDIT_LOG_ENABLED: bool = True

    class Config:
        env_file = ".env"


settings = Settings()


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once at application start."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        root.addHandler(handler)
