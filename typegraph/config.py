"""Settings for the typegraph CLI and notification consumer."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .typedef.errors import DefinitionValidationError
from .typedef.loader import load_yaml

CONFIG_ENV_VAR = "TYPEGRAPH_CONFIG"


class StoreSettings(BaseModel):
    """Where the type graph lives and who writes to it."""

    graph_path: str = "typegraph.json"
    created_by: str = "typegraph"


class KafkaSettings(BaseModel):
    """Connection settings for the type notification consumer."""

    bootstrap_servers: str = "localhost:9092"
    group_id: str = "typegraph"
    topic: str = "TYPE_DEFS"
    auto_commit: bool = False
    poll_timeout: float = 1.0
    max_messages: int = 500


class Settings(BaseModel):
    """Root settings document."""

    log_level: str = "WARNING"
    store: StoreSettings = Field(default_factory=StoreSettings)
    kafka: KafkaSettings = Field(default_factory=KafkaSettings)


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from a YAML file.

    Args:
        path: Settings file. Defaults to $TYPEGRAPH_CONFIG; with neither,
            the built-in defaults are returned.

    Raises:
        DefinitionLoadError: If the file cannot be read or parsed.
        DefinitionValidationError: If the settings are invalid.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return Settings()

    data = load_yaml(path)
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise DefinitionValidationError(
            f"Settings validation failed with {len(errors)} error(s)", errors
        ) from e
