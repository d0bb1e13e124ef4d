import uuid
from typing import Callable

# Source of identifiers for flags and plans. Engines accept one as a
# parameter so callers can supply their own scheme.
IdFactory = Callable[[], str]


def generate_uuid() -> str:
    return str(uuid.uuid4())
