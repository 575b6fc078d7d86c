"""
Configuration for the upgrade parameter tool

The two addresses are compiled-in defaults. Environment variables may
override them, following the UPGRADE_PARAMS_<FIELD> naming scheme.
No configuration files are read.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Optional

from .exceptions import ConfigurationError, ErrorCodes

LOG = logging.getLogger(__name__)

ENV_PREFIX = "UPGRADE_PARAMS_"

# Implementation contract the proxy is upgraded to
NEW_IMPLEMENTATION = "0xb2A034dbc8346bB4716820559378a502B5b5a81C"
# Token address passed to initialize(address)
EX1_TOKEN = "0x6B1fdD1E4b2aE9dE8c5764481A8B6d00070a3096"


@dataclass(frozen=True)
class UpgradeConfig:
    """Addresses used to build the upgrade call"""
    new_implementation: str = NEW_IMPLEMENTATION
    initializer_arg: str = EX1_TOKEN

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _get_env_override(env: Mapping[str, str], key: str) -> Optional[str]:
    """Get environment variable override"""
    env_key = f"{ENV_PREFIX}{key.upper()}"
    value = env.get(env_key)
    if value is None:
        return None

    value = value.strip()
    if not value:
        raise ConfigurationError(
            f"Environment variable {env_key} is set but empty",
            field=key,
            code=ErrorCodes.CONFIG_MISSING_VALUE
        )
    LOG.info(f"Using {env_key} override: {value}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> UpgradeConfig:
    """Build the configuration from defaults and environment overrides

    Args:
        env: Environment mapping (default: os.environ)

    Returns:
        UpgradeConfig instance
    """
    if env is None:
        env = os.environ

    overrides = {}
    for f in fields(UpgradeConfig):
        value = _get_env_override(env, f.name)
        if value is not None:
            overrides[f.name] = value

    return replace(UpgradeConfig(), **overrides)
