"""
Loads the ShopIngest YAML file into an `IngestionConfig`.

The CLI is the only caller, so every failure is logged and ends the process
with exit status 1 rather than raising.
"""

import yaml
from pathlib import Path
import logging
from pydantic import ValidationError
import sys

from .config_models import IngestionConfig

logger = logging.getLogger(__name__)


def _exit_with_error(message: str, **log_kwargs):
    logger.error(message, **log_kwargs)
    sys.exit(1)


def load_config(config_path: str) -> IngestionConfig:
    """
    Reads the ingestion config and validates the `vector_store`,
    `embedding_model`, `shopify` and `splitter` sections.

    Args:
        config_path (str): Path to the ingestion YAML, usually `ingestion.yaml`.

    Returns:
        IngestionConfig: The validated config, with the vector store variant
        selected by its `provider` tag.
    """
    path = Path(config_path)
    if not path.is_file():
        _exit_with_error(f"Ingestion config not found: '{path}'")

    logger.debug(f"Reading ingestion config from {path}")
    try:
        raw_config = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        _exit_with_error(f"Could not read ingestion config '{path}': {e}", exc_info=True)

    if not raw_config:
        _exit_with_error(f"Ingestion config is empty: '{path}'")

    try:
        config = IngestionConfig.model_validate(raw_config)
    except ValidationError as e:
        # Lists every offending field, e.g. an unknown vector_store provider.
        _exit_with_error(f"Invalid ingestion config '{path}':\n{e}")

    logger.info(
        f"Loaded ingestion config from '{path}' "
        f"(vector store: {config.vector_store.provider}, "
        f"embedding model: {config.embedding_model.provider.value})"
    )
    return config
