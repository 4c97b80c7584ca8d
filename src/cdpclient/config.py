"""DevTools endpoint configuration loading."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from cdpclient.lib import oj
from cdpclient.protocol.client import CDPClient, connect

logger = logging.getLogger(__name__)

# Config file locations
ENDPOINTS_CONFIG_FILENAME = "endpoints.json"
GLOBAL_ENDPOINTS_CONFIG = Path.home() / ".cdpclient" / ENDPOINTS_CONFIG_FILENAME
LOCAL_CONFIG_DIR = ".cdpclient"


@dataclass
class EndpointConfig:
    """Configuration for a single DevTools endpoint."""

    name: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    connect_timeout: float = 10.0

    @classmethod
    def from_dict(cls, name: str, data: dict) -> "EndpointConfig":
        """Create from config dict."""
        return cls(
            name=name,
            url=data.get("url", ""),
            headers=data.get("headers", {}),
            connect_timeout=data.get("connectTimeout", 10.0),
        )

    async def connect(self) -> CDPClient:
        """
        Open a client session to this endpoint.

        The URL may be a WebSocket URL or the http(s) address of a
        DevTools endpoint, as accepted by `cdpclient.protocol.connect`.

        Raises:
            ConnectionError: If the endpoint cannot be reached.
        """
        return await connect(
            self.url,
            headers=dict(self.headers),
            connect_timeout=self.connect_timeout,
        )


def _read_endpoints(path: Path) -> dict[str, EndpointConfig]:
    configs: dict[str, EndpointConfig] = {}
    try:
        data = oj.loads(path.read_bytes())
    except (OSError, oj.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable endpoint config {path}: {e}")
        return configs

    if not isinstance(data, dict):
        logger.warning(f"Ignoring endpoint config {path}: not a JSON object")
        return configs

    endpoints = data.get("endpoints", {})
    if not isinstance(endpoints, dict):
        logger.warning(f"Ignoring endpoint config {path}: 'endpoints' is not an object")
        return configs

    for name, endpoint_data in endpoints.items():
        if isinstance(endpoint_data, dict) and endpoint_data.get("url"):
            configs[name] = EndpointConfig.from_dict(name, endpoint_data)
    return configs


def load_endpoints(working_dir: Path | None = None) -> dict[str, EndpointConfig]:
    """Load endpoint configs from global and local config files.

    Global config (~/.cdpclient/endpoints.json) is loaded first.
    Local config ({working_dir}/.cdpclient/endpoints.json) overrides global.

    Returns:
        Dict mapping endpoint name to config.
    """
    configs: dict[str, EndpointConfig] = {}

    if GLOBAL_ENDPOINTS_CONFIG.exists():
        configs.update(_read_endpoints(GLOBAL_ENDPOINTS_CONFIG))

    if working_dir:
        local_config = working_dir / LOCAL_CONFIG_DIR / ENDPOINTS_CONFIG_FILENAME
        if local_config.exists():
            configs.update(_read_endpoints(local_config))

    return configs


async def connect_endpoint(name: str, working_dir: Path | None = None) -> CDPClient:
    """Connect to a named endpoint from the config files.

    Raises:
        KeyError: If no endpoint with that name is configured.
        ConnectionError: If the endpoint cannot be reached.
    """
    endpoints = load_endpoints(working_dir)
    if name not in endpoints:
        raise KeyError(f"No endpoint named {name!r} is configured")
    return await endpoints[name].connect()
