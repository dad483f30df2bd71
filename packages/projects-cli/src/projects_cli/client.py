import httpx

from projects_cli.config import Config


def get_config() -> Config:
    return Config()


def get_api_client() -> httpx.AsyncClient:
    config = get_config()
    headers = {"X-User-ID": config.user_id} if config.user_id else {}
    return httpx.AsyncClient(base_url=config.api_url, headers=headers)
