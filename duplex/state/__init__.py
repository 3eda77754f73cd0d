from .settings import AppSettings, SessionSettings, TransportSettings

__all__ = ["AppSettings", "SessionSettings", "TransportSettings"]
