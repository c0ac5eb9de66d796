from pydantic import BaseModel, ConfigDict


class BaseGolfModel(BaseModel):
    """Setup-time records. Assignments are validated like construction."""
    model_config = ConfigDict(validate_assignment=True)


class FrozenGolfModel(BaseModel):
    """Immutable engine output. Build a new one with model_copy(update=...)."""
    model_config = ConfigDict(frozen=True)
