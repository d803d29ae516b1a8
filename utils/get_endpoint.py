from core.config import ServerConfig  # type: ignore


def get_endpoint(config: ServerConfig, key: str) -> str:
    base_url = config.api_url.rstrip("/")
    if not base_url:
        raise ValueError("SendForSign API url is not configured (sendforsign_api_url / SFS_API_URL)")

    path = config.api_paths.get(key)
    if not path:
        raise ValueError(f"Missing API path for resource '{key}' under 'api_paths'")

    return f"{base_url}{path}"
