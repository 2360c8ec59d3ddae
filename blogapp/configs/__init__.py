from blogapp.configs.logger import file_logger
from blogapp.configs.settings import (
    CONFIG_MAP,
    LimiterConfig,
    pool_kwargs,
    settings,
)

__all__ = [
    "LimiterConfig",
    "file_logger",
    "pool_kwargs",
    "settings",
    "CONFIG_MAP",
]
