"""
Core pipeline orchestration module.

This module defines `ingest_products`, which turns a raw Shopify product
payload into documents and writes them to the configured vector store, and
`run_pipeline`, which drives the same flow from a YAML configuration file.
"""

import logging
import os
from typing import Any, Optional

from dotenv import load_dotenv

from ..components.chunkers import BaseChunker, PassthroughChunker
from ..components.sources import (
    DEFAULT_API_VERSION,
    ShopifyProductSource,
    load_product_documents,
)
from ..utils.config import load_config
from ..utils.config_models import EmbeddingModelConfig, ShopifySettings
from ..utils.data_models import IngestionResult
from .factory import build_chunker, dispatch_documents, resolve_embedding_model

logger = logging.getLogger(__name__)


def ingest_products(
    vector_store_config,
    embedding_model_config: EmbeddingModelConfig,
    products: Any,
    splitter: Optional[BaseChunker] = None,
) -> IngestionResult:
    """
    Embeds a product payload and stores it in the configured vector store.

    Runs once and returns after the bulk write has finished. Calling it again
    with the same input writes the documents again.

    Args:
        vector_store_config: The active PineconeConfig, AstraConfig or
            ElasticsearchConfig.
        embedding_model_config (EmbeddingModelConfig): The embedding model to use.
        products: The raw product payload, as returned by the product fetch.
        splitter (BaseChunker, optional): Splits documents before embedding.
            Documents are kept whole when omitted.

    Returns:
        IngestionResult: The provider, document count and stored ids.

    Raises:
        UnsupportedProviderError: If either config names an unknown provider.
    """
    embedder = resolve_embedding_model(embedding_model_config)

    documents = load_product_documents(products)
    documents = (splitter or PassthroughChunker()).split(documents)

    provider = vector_store_config.provider
    try:
        ids = dispatch_documents(vector_store_config, embedder, documents)
    except Exception as e:
        logger.error(f"Failed to write documents to {provider}: {e}", exc_info=True)
        raise

    logger.info(f"Ingested {len(documents)} documents into {provider}.")
    return IngestionResult(
        provider=provider, document_count=len(documents), ids=list(ids or [])
    )


def build_product_source(settings: ShopifySettings) -> ShopifyProductSource:
    """Builds the product source, falling back to SHOPIFY_* environment variables."""
    load_dotenv()
    return ShopifyProductSource(
        shop=settings.shop or os.getenv("SHOPIFY_SHOP"),
        access_token=settings.access_token or os.getenv("SHOPIFY_ACCESS_TOKEN"),
        api_version=settings.api_version
        or os.getenv("SHOPIFY_API_VERSION", DEFAULT_API_VERSION),
    )


def run_pipeline(config_path: str) -> IngestionResult:
    """
    Fetches products from Shopify and ingests them, based on a configuration file.
    """
    logger.info(f"ShopIngest pipeline starting with config: {config_path}")

    config = load_config(config_path)

    source = build_product_source(config.shopify)
    splitter = build_chunker(config.splitter)

    products = source.load_products()
    result = ingest_products(
        config.vector_store, config.embedding_model, products, splitter=splitter
    )

    logger.info("ShopIngest pipeline completed successfully.")
    return result
