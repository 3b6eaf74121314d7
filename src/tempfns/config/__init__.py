"""Configuration package for tempfns.

Sub-modules:
    parsing    – Boolean / positive-integer parsing helpers
    settings   – TempFnsConfig dataclass, get_config/set_config globals
    loader     – TempFnsConfig TOML/env loading mixin (_TempFnsConfigLoader)
    decorators – log_call, timed
"""

from tempfns.config.decorators import log_call, timed  # noqa: F401
from tempfns.config.settings import (  # noqa: F401
    SEVEN_DAYS_MS,
    TempFnsConfig,
    get_config,
    set_config,
)
