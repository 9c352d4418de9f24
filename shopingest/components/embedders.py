"""
Embedding components for the ShopIngest pipeline.

This module contains classes responsible for building the embedding client
used by the vector stores to convert product documents into numerical
vectors.
"""

from abc import ABC, abstractmethod
import logging

import numpy as np
from langchain_core.embeddings import Embeddings
from langchain_openai import OpenAIEmbeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from ..utils.config_models import EmbeddingModelConfig

logger = logging.getLogger(__name__)

# Google embeddings are always requested for storage, never for queries.
GOOGLE_TASK_TYPE = "retrieval_document"


class BaseEmbedder(ABC):
    """Abstract base class for all embedder components."""

    def __init__(self, config: EmbeddingModelConfig):
        self.model_name = config.model_name
        self.client = self._build_client(config)

    @abstractmethod
    def _build_client(self, config: EmbeddingModelConfig) -> Embeddings:
        """
        Creates the LangChain embedding client for this provider.

        Args:
            config (EmbeddingModelConfig): The embedding model configuration.

        Returns:
            Embeddings: A client the vector stores can call to embed documents.
        """
        pass

    def embed(self, chunks: list[str]) -> np.ndarray:
        """Embeds a list of text chunks into a 2D NumPy array of vectors."""
        if not chunks:
            logger.warning("Got an empty list of chunks. Returning empty array.")
            return np.array([])

        logger.info(f"Embedding {len(chunks)} chunks using '{self.model_name}'...")
        try:
            return np.array(self.client.embed_documents(chunks))
        except Exception as e:
            logger.error(f"Got error while embedding: {e}", exc_info=True)
            raise

    def test_connection(self):
        """Embeds a short probe text to check the credentials and model name."""
        logger.info(f"Testing embedding model '{self.model_name}'")
        vector = self.client.embed_query("connection test")
        logger.info(
            f"Embedding model '{self.model_name}' is reachable "
            f"(dimension={len(vector)})."
        )


class OpenAIEmbedder(BaseEmbedder):
    """
    An embedder that uses the OpenAI API to generate embeddings.
    """

    def _build_client(self, config: EmbeddingModelConfig) -> Embeddings:
        kwargs = {"api_key": config.api_key, "model": config.model_name}
        if config.dimensions is not None:
            kwargs["dimensions"] = config.dimensions
        logger.info(f"Initialized OpenAIEmbedder with model '{config.model_name}'.")
        return OpenAIEmbeddings(**kwargs)


class GoogleEmbedder(BaseEmbedder):
    """
    An embedder that uses the Google Generative AI API to generate embeddings.
    """

    def _build_client(self, config: EmbeddingModelConfig) -> Embeddings:
        logger.info(f"Initialized GoogleEmbedder with model '{config.model_name}'.")
        return GoogleGenerativeAIEmbeddings(
            google_api_key=config.api_key,
            model=config.model_name,
            task_type=GOOGLE_TASK_TYPE,
        )
