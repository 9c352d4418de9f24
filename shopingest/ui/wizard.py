"""
State behind the ingestion wizard: the saved configs and the start action.

Everything lives for the length of one session; nothing is persisted.
"""

import logging
from typing import Any, Callable, Optional

from ..core.pipeline import ingest_products
from ..utils.config_models import EmbeddingModelConfig
from ..utils.data_models import IngestionResult

logger = logging.getLogger(__name__)


class IngestionWizard:
    """
    Holds the configuration collected by the wizard and starts ingestion.

    Args:
        notify (Callable[[str], None]): Shows a short toast message to the user.
    """

    def __init__(self, notify: Callable[[str], None]):
        self.notify = notify
        self.vector_store_config = None
        self.embedding_model_config: Optional[EmbeddingModelConfig] = None
        self.in_progress = False
        self.products: Any = None
        self.result: Optional[IngestionResult] = None

    def set_vector_store_config(self, config):
        self.vector_store_config = config
        self.notify(f"{config.provider} configuration saved")

    def set_embedding_model_config(self, config: EmbeddingModelConfig):
        self.embedding_model_config = config
        self.notify(f"{config.provider.value} embedding model saved")

    @property
    def ready(self) -> bool:
        return (
            self.vector_store_config is not None
            and self.embedding_model_config is not None
            and not self.in_progress
        )

    def start_ingestion(
        self, load_products: Callable[[], Any]
    ) -> Optional[IngestionResult]:
        """
        Loads the products and ingests them with the saved configs.

        Returns None without doing anything when a config is missing or an
        ingestion is already running. Errors are reported through `notify`
        and re-raised.
        """
        if not self.ready:
            logger.warning("Ingestion not started: configs missing or already running.")
            return None

        self.in_progress = True
        try:
            self.products = load_products()
            self.notify("Products loaded successfully")
            self.result = ingest_products(
                self.vector_store_config, self.embedding_model_config, self.products
            )
            self.notify(
                f"Ingested {self.result.document_count} products into "
                f"{self.result.provider}"
            )
            return self.result
        except Exception as e:
            logger.error(f"Data ingestion failed: {e}", exc_info=True)
            self.notify(f"Data ingestion failed: {e}")
            raise
        finally:
            self.in_progress = False
