"""Library configuration derived from the environment."""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime settings, overridable via SEEDED_RNG_* environment variables."""

    model_config = ConfigDict(env_prefix="SEEDED_RNG_")

    # Entropy: fail unseeded secure construction instead of degrading
    # to the weak source when the OS entropy pool is unreachable
    require_strong_entropy: bool = False

    # Telemetry
    telemetry_enabled: bool = True

    # Checkpoint format stamped into every snapshot
    checkpoint_version: str = "1"


settings = Settings()
