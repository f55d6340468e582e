import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .error import ConfigurationError

DEFAULT_PROPERTIES_SEARCH_TEMPLATE = "properties-search-template"
DEFAULT_INFERENCE_ID = ".elser-2-elasticsearch"

# search_template always routes here, whatever the caller asks for.
PROPERTIES_INDEX = "properties"
PROPERTIES_SEARCH_TEMPLATE = "properties-search-template"

INFERENCE_TIMEOUT_SECONDS = 60
GEOCODING_REGION = "us"
GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"
GEOCODING_HTTP_TIMEOUT = 30

SERVER_NAME = "propsearch-server"
SERVER_VERSION = "0.1.1"

AUTH_PAIRING_MESSAGE = (
    "Either ES_API_KEY or both ES_USERNAME and ES_PASSWORD must be provided, "
    "or no auth for local development"
)

logger = logging.getLogger("propsearch")


class PropsearchConfig(BaseModel):
    """Connection and auth settings for Elasticsearch plus the tool defaults."""

    url: str = Field(..., description="Elasticsearch server URL")
    api_key: Optional[str] = Field(default=None, description="API key for Elasticsearch authentication")
    username: Optional[str] = Field(default=None, description="Username for Elasticsearch authentication")
    password: Optional[str] = Field(default=None, description="Password for Elasticsearch authentication")
    ca_cert: Optional[str] = Field(default=None, description="Path to custom CA certificate for Elasticsearch")
    google_maps_api_key: Optional[str] = Field(
        default=None, description="Google Maps API key for geocoding functionality"
    )
    properties_search_template: str = Field(
        default=DEFAULT_PROPERTIES_SEARCH_TEMPLATE,
        description="ID of the search template for properties",
    )
    inference_id: str = Field(
        default=DEFAULT_INFERENCE_ID,
        description="ID of the Elasticsearch ELSER inference endpoint to check",
    )

    model_config = {"frozen": True}

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("Elasticsearch URL cannot be empty")
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("Invalid Elasticsearch URL format")
        return value

    @field_validator(
        "api_key", "username", "password", "ca_cert", "google_maps_api_key", mode="before"
    )
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("properties_search_template", "inference_id", mode="before")
    @classmethod
    def _blank_to_default(cls, value: Any, info) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        return value

    @model_validator(mode="after")
    def _check_auth_pairing(self) -> "PropsearchConfig":
        # api_key is independent; only the basic-auth pair has to be complete.
        if bool(self.username) != bool(self.password):
            raise ValueError(AUTH_PAIRING_MESSAGE)
        return self

    def client_options(self) -> Dict[str, Any]:
        """
        Build keyword arguments for the Elasticsearch client.

        - api_key wins over username/password
        - ca_cert is only passed when the file can be read; otherwise the
          failure is logged and the client is built without it
        - every request is sent once: transport retries are switched off
        """
        options: Dict[str, Any] = {
            "hosts": [self.url],
            "max_retries": 0,
            "retry_on_status": (),
            "retry_on_timeout": False,
        }
        if self.api_key:
            options["api_key"] = self.api_key
        elif self.username and self.password:
            options["basic_auth"] = (self.username, self.password)

        if self.ca_cert:
            try:
                Path(self.ca_cert).read_bytes()
                options["ca_certs"] = self.ca_cert
            except OSError as e:
                logger.error(f"Failed to read certificate file: {e}")
        return options


def _load_env() -> None:
    """
    Load environment variables from the project root `.env`, falling back to
    the current working directory.
    """
    project_root = Path(__file__).resolve().parents[2]
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
        return

    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(cwd_env)


def get_env_config() -> Dict[str, Any]:
    """
    Raw configuration read from environment variables.
    - ES_URL: Elasticsearch URL (required)
    - ES_API_KEY / ES_USERNAME / ES_PASSWORD: optional auth
    - ES_CA_CERT: optional CA certificate path
    - GOOGLE_MAPS_API_KEY: optional, enables geocoding
    - PROPERTIES_SEARCH_TEMPLATE: stored template id for parameter discovery
    - ELSER_INFERENCE_ID: inference endpoint probed at startup
    """
    return {
        "url": os.getenv("ES_URL", ""),
        "api_key": os.getenv("ES_API_KEY", ""),
        "username": os.getenv("ES_USERNAME", ""),
        "password": os.getenv("ES_PASSWORD", ""),
        "ca_cert": os.getenv("ES_CA_CERT", ""),
        "google_maps_api_key": os.getenv("GOOGLE_MAPS_API_KEY", ""),
        "properties_search_template": os.getenv("PROPERTIES_SEARCH_TEMPLATE", ""),
        "inference_id": os.getenv("ELSER_INFERENCE_ID", ""),
    }


def load_config(raw: Optional[Dict[str, Any]] = None) -> PropsearchConfig:
    """
    Validate raw settings (the environment by default) into a config.

    Raises:
        ConfigurationError: when validation fails; pydantic errors are kept in details
    """
    if raw is None:
        _load_env()
        raw = get_env_config()
    try:
        return PropsearchConfig(**raw)
    except ValidationError as e:
        # model-level errors carry no location; the only one is the auth pairing check
        fields = sorted(
            {".".join(str(p) for p in err["loc"]) or "username, password" for err in e.errors()}
        )
        raise ConfigurationError(
            f"Invalid configuration ({', '.join(fields)}): "
            + "; ".join(err["msg"] for err in e.errors()),
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e
