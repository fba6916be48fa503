"""
Configuration loader for engine profiles and environment variables.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional
import yaml


DEFAULT_PROFILE = "default"


class ConfigLoader:
    """Load engine profiles from YAML files and the environment."""

    CONFIG_DIR = Path(__file__).parent.parent.parent / "configs"

    @classmethod
    def available_profiles(cls) -> list:
        return sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))

    @classmethod
    def load_profile(cls, profile_name: str = DEFAULT_PROFILE) -> Dict[str, Any]:
        """
        Load a named profile.

        Args:
            profile_name: Name of the profile (default, long-shift, ...)

        Returns:
            Dictionary with configuration values

        Raises:
            FileNotFoundError: If profile doesn't exist
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"

        if not profile_path.exists():
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. "
                f"Available profiles: {', '.join(cls.available_profiles())}"
            )

        with open(profile_path, "r") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def get_profile_from_env(cls) -> Optional[str]:
        """Get profile name from the ROUTE_PROFILE environment variable."""
        return os.getenv("ROUTE_PROFILE")

    @classmethod
    def load_default_or_env_profile(cls) -> Dict[str, Any]:
        """
        Load the profile named by ROUTE_PROFILE, or the default profile.

        Returns:
            Configuration dictionary (empty if the default profile is missing)
        """
        profile = cls.get_profile_from_env()
        if profile:
            return cls.load_profile(profile)
        try:
            return cls.load_profile(DEFAULT_PROFILE)
        except FileNotFoundError:
            return {}


def get_config() -> Dict[str, Any]:
    """Convenience function to get current configuration."""
    return ConfigLoader.load_default_or_env_profile()
