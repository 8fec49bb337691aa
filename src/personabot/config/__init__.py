from .models import AppConfig, LoggingConfig, MemoryConfig, ResponderConfig

__all__ = ["AppConfig", "LoggingConfig", "MemoryConfig", "ResponderConfig"]
