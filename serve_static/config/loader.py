"""Configuration loader for serve_static."""
import os
from typing import Any, Dict, Optional

import yaml


class Config:
    """Static site configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """Load configuration from YAML file."""
        if config_path is None:
            config_path = os.getenv("SERVE_STATIC_CONFIG", "config.yaml")

        with open(config_path, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        # Root directory; existence is checked on every resolution, not here
        self.root_path = raw_config.get('rootPath')
        if not self.root_path:
            raise ValueError("A 'rootPath' must be configured")
        self.root_path = str(self.root_path)

        self.allow_symlinks = raw_config.get('allowSymlinks', False)
        if not isinstance(self.allow_symlinks, bool):
            raise ValueError("'allowSymlinks' must be true or false")

        # Listing
        listing = raw_config.get('listing') or {}
        self.listing_enabled = listing.get('enabled', True)
        self.show_hidden = listing.get('showHidden', False)

        # Logging
        logging = raw_config.get('logging') or {}
        self.log_level = logging.get('level', 'INFO')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rootPath': self.root_path,
            'allowSymlinks': self.allow_symlinks,
            'listing': {
                'enabled': self.listing_enabled,
                'showHidden': self.show_hidden
            },
            'logging': {
                'level': self.log_level
            }
        }

    def save_config(self, config_path: Optional[str] = None):
        """Save configuration back to YAML file."""
        if config_path is None:
            config_path = os.getenv("SERVE_STATIC_CONFIG", "config.yaml")

        with open(config_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
