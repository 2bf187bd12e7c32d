"""
Defaults for mock jobs, loaded with pydantic-settings.

Each field can be overridden by an environment variable of the same
name (JOB_DEFAULT_DELAY_MS=250) or by a line in a local .env file.

Job reads these values when it is constructed, so a test can change
`settings.JOB_DEFAULT_DELAY_MS` (e.g. with monkeypatch) and every Job
built afterwards picks it up.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Job defaults ────────────────────────────────────────────
    JOB_DEFAULT_TYPE: str = "email"
    JOB_DEFAULT_DELAY_MS: float = 10       # simulated work duration
    JOB_DEFAULT_FAIL_PROB: float = 0.0     # probability a run rejects

    # ── Randomness ──────────────────────────────────────────────
    # Seed for the rng each Job builds when none is injected.
    # None → seeded from the OS, outcomes differ between runs.
    JOB_RANDOM_SEED: Optional[int] = None

    # ── App ─────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton — import this everywhere
settings = Settings()
