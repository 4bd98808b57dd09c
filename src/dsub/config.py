"""Runtime configuration for the DSUB context.

Components take a ``DsubConfig`` in their constructor. The module-level
``get_config()`` / ``set_config()`` pair is only for composition roots
(the HTTP app and command handlers) that cannot receive one directly.
"""

import os
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_BROKER_URL = "http://localhost:8081/SpiritXDSDsub/Dsub"
DEFAULT_CONSUMER_URL = "http://localhost:8000/dsub/notify"
DEFAULT_PIX_URL = "http://localhost:8081/SpiritPIXFhir/r4/Patient"
DEFAULT_REGIONAL_OID = "2.16.840.1.113883.2.1.3.31.2.1.1"
DEFAULT_NHS_OID = "2.16.840.1.113883.2.1.4.1"


@dataclass(frozen=True)
class DsubConfig:
    """Broker, consumer and identity endpoints plus outbound timeouts."""

    broker_url: str = DEFAULT_BROKER_URL
    consumer_url: str = DEFAULT_CONSUMER_URL
    pix_url: str = DEFAULT_PIX_URL
    regional_oid: str = DEFAULT_REGIONAL_OID
    nhs_oid: str = DEFAULT_NHS_OID
    soap_timeout: float = 2.0
    pix_timeout: float = 5.0

    @classmethod
    def from_env(cls, environ=None) -> "DsubConfig":
        """Build a config from environment variables, falling back to defaults."""
        environ = os.environ if environ is None else environ
        values = {}

        for field_name, variable in _ENV_VARIABLES.items():
            raw = environ.get(variable)
            if raw:
                values[field_name] = raw
                logger.info("Config value set from environment", variable=variable)
            else:
                logger.debug("Environment variable is empty, using default", variable=variable)

        for field_name in ("soap_timeout", "pix_timeout"):
            if field_name in values:
                values[field_name] = float(values[field_name])

        return cls(**values)


_ENV_VARIABLES = {
    "broker_url": "DSUB_BROKER_URL",
    "consumer_url": "DSUB_CONSUMER_URL",
    "pix_url": "PIX_MANAGER_URL",
    "regional_oid": "REGIONAL_OID",
    "nhs_oid": "NHS_OID",
    "soap_timeout": "DSUB_SOAP_TIMEOUT",
    "pix_timeout": "PIX_TIMEOUT",
}

_current_config: DsubConfig | None = None


def get_config() -> DsubConfig:
    """Return the active config, reading the environment on first use."""
    global _current_config
    if _current_config is None:
        _current_config = DsubConfig.from_env()
    return _current_config


def set_config(config: DsubConfig) -> None:
    """Override the active config (useful for tests)."""
    global _current_config
    _current_config = config


def reset_config() -> None:
    """Forget the active config so the next call re-reads the environment."""
    global _current_config
    _current_config = None
