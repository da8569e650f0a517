"""
Engine configuration.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class GameConfig(BaseModel):
    """Configuration for a game session. Rules themselves are fixed."""

    seed: Optional[int] = Field(
        default=None,
        description="Seed for the shuffles; None uses system randomness"
    )
    opponent_delay: float = Field(
        default=1.0,
        ge=0.0,
        le=10.0,
        description="Pause in seconds before each opponent move (async runner only)"
    )
    save_path: Optional[str] = Field(
        default=None,
        description="File to persist snapshots to; None keeps them in memory"
    )
    autosave: bool = Field(
        default=True,
        description="Persist a snapshot after every applied move"
    )

    @field_validator('save_path')
    @classmethod
    def validate_save_path(cls, v):
        """Reject blank paths."""
        if v is not None and not v.strip():
            raise ValueError('save_path must not be blank')
        return v


# Default configuration instance
default_config = GameConfig()


def create_config(**overrides) -> GameConfig:
    """Create a GameConfig with optional overrides."""
    config_dict = default_config.model_dump()
    config_dict.update(overrides)
    return GameConfig(**config_dict)
