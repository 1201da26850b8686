"""
Configuration loader for hex graticules.

Loads configuration from config.yaml and provides easy access to parameters.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from graticule import Graticule, MapDimension
from graticule_errors import ConfigurationError
from hex_geometry import Geometry

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


class Config:
    """Configuration loader and accessor."""

    def __init__(self, config_path=DEFAULT_CONFIG_PATH):
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to config.yaml file
        """
        self.config_path = Path(config_path)
        with open(self.config_path, 'r') as f:
            self._config = yaml.safe_load(f) or {}

        logger.debug(f"Loaded configuration from {self.config_path}")

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-separated path.

        Examples:
            config.get('graticule.r.min') -> -3
            config.get('render.hex_pixel_size') -> 24

        Args:
            path: Dot-separated path to configuration value
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        parts = path.split('.')
        value = self._config

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def dimension(self, axis: str) -> MapDimension:
        """
        Get the bounds of one cubic axis.

        Args:
            axis: 'r', 's' or 't'

        Returns:
            MapDimension for that axis (defaults to [-1, 1])
        """
        bounds = self.get(f'graticule.{axis}', {})
        try:
            return MapDimension(int(bounds.get('min', -1)), int(bounds.get('max', 1)))
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"graticule.{axis} must have integer min and max: {bounds!r}") from e

    @property
    def dimensions(self) -> Tuple[MapDimension, MapDimension, MapDimension]:
        """Get (r, s, t) dimensions."""
        return (self.dimension('r'), self.dimension('s'), self.dimension('t'))

    @property
    def geometry(self) -> Geometry:
        """
        Get hex geometry from either geometry.radius or geometry.apothem.

        Raises:
            ConfigurationError: If both are set or the value is not positive
        """
        radius = self.get('geometry.radius')
        apothem = self.get('geometry.apothem')

        if radius is not None and apothem is not None:
            raise ConfigurationError("Set only one of geometry.radius and geometry.apothem")

        try:
            if apothem is not None:
                return Geometry.from_apothem(apothem)
            return Geometry.from_radius(1.0 if radius is None else radius)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid hex scale: {e}") from e

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return str(self.get('logging.level', 'INFO')).upper()

    @property
    def render_output_path(self) -> Path:
        """Get default output path for rendered images."""
        return Path(self.get('render.output_path', 'output/graticule.png'))

    @property
    def hex_pixel_size(self) -> int:
        """Get hex radius in pixels for rendering."""
        return int(self.get('render.hex_pixel_size', 24))

    @property
    def render_margin(self) -> int:
        """Get image margin in pixels for rendering."""
        return int(self.get('render.margin', 8))

    def build_graticule(self) -> Graticule:
        """
        Create a graticule with the configured dimensions and geometry.

        Storage is not allocated; call init_storage() or populate().
        """
        graticule = Graticule(geometry=self.geometry)
        graticule.configure(*self.dimensions)
        return graticule

    def __repr__(self) -> str:
        """String representation."""
        return f"Config(path='{self.config_path}', dimensions={self.dimensions})"


# Global config instance
_config_instance: Optional[Config] = None


def get_config(config_path=DEFAULT_CONFIG_PATH) -> Config:
    """
    Get or create global config instance.

    Args:
        config_path: Path to config file

    Returns:
        Config instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config(config_path)
    return _config_instance


def reload_config(config_path=DEFAULT_CONFIG_PATH) -> Config:
    """
    Reload configuration from file.

    Args:
        config_path: Path to config file

    Returns:
        New Config instance
    """
    global _config_instance
    _config_instance = Config(config_path)
    return _config_instance


def configure_logging(config: Config) -> None:
    """Set up root logging at the configured level."""
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def summary(config: Config) -> Dict[str, Any]:
    """Plain-data view of the active configuration."""
    r_dim, s_dim, t_dim = config.dimensions
    geometry = config.geometry
    return {
        'r': (r_dim.min, r_dim.max),
        's': (s_dim.min, s_dim.max),
        't': (t_dim.min, t_dim.max),
        'radius': geometry.radius,
        'apothem': geometry.apothem,
        'log_level': config.log_level,
    }


if __name__ == "__main__":
    # Test config loader
    config = get_config()
    print(f"Config loaded: {config}")
    for key, value in summary(config).items():
        print(f"  {key}: {value}")
