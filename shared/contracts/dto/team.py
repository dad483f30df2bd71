from pydantic import BaseModel, ConfigDict


class TeamDTO(BaseModel):
    """Team response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
