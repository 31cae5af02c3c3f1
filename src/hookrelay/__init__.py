"""hookrelay: relays GitHub and Trello webhook events to a Discord channel."""

from hookrelay.settings import RelayConfig, Settings, load_config

__version__ = "0.1.0"

__all__ = ["RelayConfig", "Settings", "load_config", "__version__"]
