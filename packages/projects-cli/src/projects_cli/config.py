from pydantic import Field

from shared.config import BaseSettings, api_url_field


class Config(BaseSettings):
    """Projects CLI Configuration."""

    api_url: str = api_url_field(required=True)

    user_id: str | None = Field(
        default=None,
        alias="PROJECTS_USER_ID",
        description="Acting user sent as X-User-ID (required for branch overviews)",
    )
