from .logging import configure_logging
from .settings import load_settings, load_session_settings, load_transport_settings

__all__ = ["configure_logging", "load_settings", "load_session_settings", "load_transport_settings"]
