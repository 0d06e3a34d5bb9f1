"""Configuration for the interpreter."""

import os
from dataclasses import dataclass
from pathlib import Path


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Interpreter configuration."""

    game_file: Path | None = None
    log_level: str = "WARNING"
    log_file: Path | None = None
    json_logs: bool = False
    seed: int | None = None
    show_intro: bool = True
    delay_seconds: float = 1.0
    # Conditions ORIG/-ORIG compare an object's location with itself in the
    # reference interpreter; enable to compare with the original location.
    compare_original_location: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        game_file = os.getenv("SCOTTADAMS_GAME_FILE")
        log_file = os.getenv("SCOTTADAMS_LOG_FILE")
        seed = os.getenv("SCOTTADAMS_SEED")

        return cls(
            game_file=Path(game_file) if game_file else None,
            log_level=os.getenv("SCOTTADAMS_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=_env_flag("SCOTTADAMS_JSON_LOGS", False),
            seed=int(seed) if seed else None,
            show_intro=_env_flag("SCOTTADAMS_SHOW_INTRO", True),
            delay_seconds=float(os.getenv("SCOTTADAMS_DELAY", str(cls.delay_seconds))),
            compare_original_location=_env_flag(
                "SCOTTADAMS_COMPARE_ORIGINAL_LOCATION", False
            ),
        )
