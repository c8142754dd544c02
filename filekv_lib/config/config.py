from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, ValidationError

from filekv_lib.storage.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('data/config/server_config.yml')


class ServerConfig(BaseModel):
    backend: str = 'file'
    path: Optional[str] = None
    log_level: str = 'WARNING'
    host: str = '127.0.0.1'
    port: int = 8200

    def backend_options(self) -> Dict[str, str]:
        """Return the option mapping handed to `create_backend`."""
        opts: Dict[str, str] = {}
        if self.path:
            opts['path'] = self.path
        return opts


def load_config(config_path: Optional[Path] = None) -> ServerConfig:
    """Load the YAML server configuration.

    A missing file yields the defaults. An unreadable or invalid file raises
    `ConfigError`.
    """
    cfg_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        logger.debug('No config at %s, using defaults', cfg_path)
        return ServerConfig()
    try:
        with cfg_path.open('r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f'Failed to parse {cfg_path}: {e}') from e
    if not isinstance(raw, dict):
        raise ConfigError(f'{cfg_path} must contain a mapping')
    try:
        cfg = ServerConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f'Invalid configuration in {cfg_path}: {e}') from e
    logger.debug('Loaded config from %s: backend=%s', cfg_path, cfg.backend)
    return cfg
