from .config import SDK_CONFIG, AppConfig, get_config

__all__ = ["SDK_CONFIG", "AppConfig", "get_config"]
