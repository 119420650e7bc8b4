from pydantic import BaseModel, Field

# --- Identity ---


class Principal(BaseModel):
    """Authenticated user attached to a request. Used for audit only."""

    id: str
    email: str
    roles: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}
