"""
Network configuration for the Sui SDK.

Known networks ship with the package in ``data/networks.json``. Explicit
arguments win over environment variables, which win over the bundled presets.
"""
import importlib.resources
import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

ENV_RPC_URL = "SUI_RPC_URL"
ENV_RPC_TIMEOUT = "SUI_RPC_TIMEOUT"
ENV_NETWORK = "SUI_NETWORK"

DEFAULT_NETWORK = "devnet"
DEFAULT_TIMEOUT = 30.0


class NetworkConfig:
    """Access to bundled network presets"""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load the bundled network presets (cached after the first call).

        Returns:
            Mapping of network name to its settings
        """
        if cls._networks_cache is None:
            resource = importlib.resources.files("sui_sdk") / "data" / "networks.json"
            with resource.open("r", encoding="utf-8") as f:
                cls._networks_cache = json.load(f)
            logger.debug("Loaded %d network presets", len(cls._networks_cache))
        return cls._networks_cache

    @classmethod
    def get_network(cls, name: str) -> Dict[str, Any]:
        """
        Get the settings of one network.

        Raises:
            ValueError: If the network is unknown
        """
        networks = cls.load_networks()
        if name not in networks:
            raise ValueError(f"Unknown network '{name}'. Available: {', '.join(sorted(networks))}")
        return networks[name]

    @classmethod
    def get_rpc_url(cls, network: Optional[str] = None) -> str:
        """
        Resolve the RPC URL to use.

        ``SUI_RPC_URL`` overrides the preset; otherwise the preset for
        ``network`` (or ``SUI_NETWORK``, or devnet) is used.
        """
        env_url = os.environ.get(ENV_RPC_URL)
        if env_url and network is None:
            return env_url
        name = network or os.environ.get(ENV_NETWORK, DEFAULT_NETWORK)
        return cls.get_network(name)["rpc"]

    @staticmethod
    def get_timeout() -> float:
        """Request timeout from ``SUI_RPC_TIMEOUT``, in seconds."""
        raw = os.environ.get(ENV_RPC_TIMEOUT)
        if not raw:
            return DEFAULT_TIMEOUT
        try:
            timeout = float(raw)
        except ValueError:
            logger.warning("Invalid %s value %r, using %s", ENV_RPC_TIMEOUT, raw, DEFAULT_TIMEOUT)
            return DEFAULT_TIMEOUT
        if timeout <= 0:
            logger.warning("Non-positive %s value %r, using %s", ENV_RPC_TIMEOUT, raw, DEFAULT_TIMEOUT)
            return DEFAULT_TIMEOUT
        return timeout
