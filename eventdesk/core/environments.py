"""
Deployment environments and data-source routing.

The environment is resolved once at startup into an immutable
``EnvironmentConfig`` and handed to whatever needs it (the FastAPI app keeps
it on ``app.state.environment``; client code receives it as an argument).
Nothing here reads global state after construction.
"""
import enum
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class EnvironmentName(str, enum.Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    SANDBOX = "sandbox"


class DataSourceType(str, enum.Enum):
    DATABASE = "database"  # direct storage access
    API = "api"            # through the REST API
    HYBRID = "hybrid"      # reads through the API, writes directly


class EnvironmentConfigError(RuntimeError):
    """Raised when an environment cannot be built from the current settings."""


@dataclass(frozen=True)
class FeatureFlags:
    admin_controls: bool = True
    debug_mode: bool = False
    experimental_features: bool = False
    data_sync_from_production: bool = False


@dataclass(frozen=True)
class EnvironmentConfig:
    name: EnvironmentName
    data_source: DataSourceType
    api_base_url: Optional[str] = None
    features: FeatureFlags = field(default_factory=FeatureFlags)

    @property
    def uses_api(self) -> bool:
        return self.data_source in (DataSourceType.API, DataSourceType.HYBRID)

    def is_feature_enabled(self, feature: str) -> bool:
        if not hasattr(self.features, feature):
            raise KeyError(f"Unknown feature flag: {feature}")
        return bool(getattr(self.features, feature))


ENVIRONMENTS: Dict[EnvironmentName, EnvironmentConfig] = {
    EnvironmentName.DEVELOPMENT: EnvironmentConfig(
        name=EnvironmentName.DEVELOPMENT,
        data_source=DataSourceType.DATABASE,
        features=FeatureFlags(
            admin_controls=True,
            debug_mode=True,
            experimental_features=True,
            data_sync_from_production=False,
        ),
    ),
    EnvironmentName.STAGING: EnvironmentConfig(
        name=EnvironmentName.STAGING,
        data_source=DataSourceType.API,
        api_base_url="https://eventdesk-api-staging.run.app/api/v1",
        features=FeatureFlags(
            admin_controls=True,
            debug_mode=True,
            experimental_features=False,
            data_sync_from_production=True,
        ),
    ),
    EnvironmentName.PRODUCTION: EnvironmentConfig(
        name=EnvironmentName.PRODUCTION,
        data_source=DataSourceType.API,
        api_base_url="https://eventdesk-api.run.app/api/v1",
        features=FeatureFlags(
            admin_controls=True,
            debug_mode=False,
            experimental_features=False,
            data_sync_from_production=False,
        ),
    ),
    EnvironmentName.SANDBOX: EnvironmentConfig(
        name=EnvironmentName.SANDBOX,
        data_source=DataSourceType.DATABASE,
        features=FeatureFlags(
            admin_controls=True,
            debug_mode=True,
            experimental_features=True,
            data_sync_from_production=False,
        ),
    ),
}


def detect_environment(hostname: Optional[str], override: Optional[str] = None) -> EnvironmentName:
    """
    Resolve the environment name.

    A valid override always wins. Otherwise the hostname decides:
    localhost -> development, "staging"/"dev" -> staging,
    "sandbox"/"experimental" -> sandbox, anything else -> production.
    """
    if override:
        try:
            return EnvironmentName(override.strip().lower())
        except ValueError:
            logger.warning(f"Ignoring unknown environment override '{override}'")

    host = (hostname or "").strip().lower()
    if host in ("localhost", "127.0.0.1"):
        return EnvironmentName.DEVELOPMENT
    if "staging" in host or "dev" in host:
        return EnvironmentName.STAGING
    if "sandbox" in host or "experimental" in host:
        return EnvironmentName.SANDBOX
    return EnvironmentName.PRODUCTION


def load_environment(settings) -> EnvironmentConfig:
    """Build the environment config for this process from settings."""
    name = detect_environment(settings.PUBLIC_HOSTNAME, settings.ENVIRONMENT)
    config = ENVIRONMENTS[name]

    if settings.API_BASE_URL:
        config = replace(config, api_base_url=settings.API_BASE_URL.rstrip("/"))

    if config.uses_api and not config.api_base_url:
        raise EnvironmentConfigError(
            f"Environment '{name.value}' reads through the API but no API base URL is configured"
        )

    return config
