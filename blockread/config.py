"""Short-circuit read metrics configuration.

The provider never derives its settings; they come from here. Three sources
are supported:
- explicit values: ScrMetricsConf.create(...)
- a flat mapping keyed like the HDFS client settings
- environment variables: BLOCKREAD_SCR_METRICS_SAMPLING_PERCENTAGE,
  BLOCKREAD_SCR_METRICS_ENABLED

Bad values never raise here. They are logged and turned into a disabled
configuration. Use validate_percentage() for strict checking.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from blockread.errors import ConfigError

logger = logging.getLogger(__name__)

SAMPLING_PERCENTAGE_KEY = "dfs.client.read.shortcircuit.metrics.sampling.percentage"
METRICS_ENABLED_KEY = "dfs.client.read.shortcircuit.metrics.enabled"
DEFAULT_SAMPLING_PERCENTAGE = 0

ENV_SAMPLING_PERCENTAGE = "SCR_METRICS_SAMPLING_PERCENTAGE"
ENV_METRICS_ENABLED = "SCR_METRICS_ENABLED"

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class ScrMetricsConf:
    sampling_enabled: bool
    sampling_percentage: int

    @classmethod
    def disabled(cls) -> "ScrMetricsConf":
        return cls(sampling_enabled=False, sampling_percentage=0)

    @classmethod
    def create(
        cls,
        sampling_percentage: Any = DEFAULT_SAMPLING_PERCENTAGE,
        sampling_enabled: Optional[bool] = None,
    ) -> "ScrMetricsConf":
        """
        Build a configuration, degrading invalid input to disabled.

        Args:
            sampling_percentage: Integer in [0, 100]
            sampling_enabled: Explicit switch; defaults to percentage > 0
        """
        try:
            percentage = validate_percentage(sampling_percentage)
        except ConfigError as e:
            logger.warning(f"Disabling short-circuit read metrics: {e}")
            return cls.disabled()
        if sampling_enabled is None:
            sampling_enabled = percentage > 0
        return cls(sampling_enabled=bool(sampling_enabled), sampling_percentage=percentage)


def validate_percentage(value: Any) -> int:
    """
    Check a sampling percentage.

    Returns:
        The percentage as an int

    Raises:
        ConfigError: if the value is not an integer in [0, 100]
    """
    if isinstance(value, bool):
        raise ConfigError("Sampling percentage must be an integer", {"value": value})
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ConfigError("Sampling percentage must be an integer", {"value": value})
    if not isinstance(value, int):
        raise ConfigError("Sampling percentage must be an integer", {"value": value})
    if value < 0 or value > 100:
        raise ConfigError(
            "Sampling percentage must be between 0 and 100",
            {"value": value},
        )
    return value


def parse_bool(value: Any) -> Optional[bool]:
    """Parse a boolean setting; None when the value is not recognised."""
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


def load_conf_from_mapping(mapping: Mapping[str, Any]) -> ScrMetricsConf:
    """Build a configuration from HDFS-style client settings."""
    percentage = mapping.get(SAMPLING_PERCENTAGE_KEY, DEFAULT_SAMPLING_PERCENTAGE)
    enabled = None
    if METRICS_ENABLED_KEY in mapping:
        enabled = parse_bool(mapping[METRICS_ENABLED_KEY])
        if enabled is None:
            logger.warning(
                f"Ignoring unrecognised value for {METRICS_ENABLED_KEY}: "
                f"{mapping[METRICS_ENABLED_KEY]!r}"
            )
    return ScrMetricsConf.create(percentage, enabled)


def load_conf_from_env(prefix: str = "BLOCKREAD_") -> Optional[ScrMetricsConf]:
    """
    Build a configuration from environment variables.

    Returns:
        None when neither variable is set, meaning no configuration is available
    """
    raw_percentage = os.getenv(prefix + ENV_SAMPLING_PERCENTAGE)
    raw_enabled = os.getenv(prefix + ENV_METRICS_ENABLED)
    if raw_percentage is None and raw_enabled is None:
        return None

    settings = {}
    if raw_percentage is not None:
        settings[SAMPLING_PERCENTAGE_KEY] = raw_percentage
    if raw_enabled is not None:
        settings[METRICS_ENABLED_KEY] = raw_enabled
    return load_conf_from_mapping(settings)
