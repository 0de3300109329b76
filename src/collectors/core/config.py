import os
from typing import Optional
from pydantic import BaseModel, Field

ENV_PREFIX = "COLLECTORS_"


class Settings(BaseModel):
    """Evaluation knobs for the custom collector step of the demo."""

    PARALLEL: bool = True
    MAX_WORKERS: Optional[int] = Field(default=None, ge=1)
    CHUNK_SIZE: Optional[int] = Field(default=None, ge=1)

    @classmethod
    def load(cls) -> "Settings":
        values = {}
        for name in cls.model_fields:
            raw = os.getenv(ENV_PREFIX + name)
            if raw is not None and raw.strip() != "":
                values[name] = raw.strip()

        return cls(**values)
