from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

ENV_PREFIX = "CUBEWALK_"


def _as_int(v: Any) -> Optional[int]:
    try:
        return int(v)
    except (TypeError, ValueError):
        return None


@dataclass(slots=True)
class WalkSettings:
    max_board_cells: int = 250_000
    max_program_length: int = 100_000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WalkSettings":
        env = os.environ if environ is None else environ
        settings = cls()

        board_cells = _as_int(env.get(ENV_PREFIX + "MAX_BOARD_CELLS"))
        program_length = _as_int(env.get(ENV_PREFIX + "MAX_PROGRAM_LENGTH"))
        log_level = env.get(ENV_PREFIX + "LOG_LEVEL")
        if board_cells is not None:
            settings.max_board_cells = max(6, min(4_000_000, board_cells))
        if program_length is not None:
            settings.max_program_length = max(1, min(10_000_000, program_length))
        if log_level and isinstance(logging.getLevelName(log_level.upper()), int):
            settings.log_level = log_level.upper()
        return settings


def configure_logging(settings: WalkSettings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
