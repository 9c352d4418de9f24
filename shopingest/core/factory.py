"""
Component Factory for the ShopIngest pipeline.

This module implements the factory pattern for creating pipeline components.
Registries map provider tags (e.g., 'Pinecone') to the component classes that
implement them, so a config selects its embedder and vector store by name.
"""

import logging
from typing import List

from langchain_core.documents import Document

from ..components.chunkers import PassthroughChunker, RecursiveCharacterChunker
from ..components.embedders import BaseEmbedder, GoogleEmbedder, OpenAIEmbedder
from ..components.sinks import AstraSink, BaseSink, ElasticsearchSink, PineconeSink
from ..utils.config_models import (
    EmbeddingModelConfig,
    EmbeddingModelProvider,
    SplitterConfig,
    VectorStoreProvider,
)
from .exceptions import UnsupportedProviderError

logger = logging.getLogger(__name__)

# A registry mapping embedding providers to their Embedder classes.
# HuggingFace is offered by the forms but has no embedder yet.
EMBEDDER_REGISTRY = {
    EmbeddingModelProvider.OPENAI: OpenAIEmbedder,
    EmbeddingModelProvider.GOOGLE: GoogleEmbedder,
}

# A registry mapping vector store providers to their Sink classes.
SINK_REGISTRY = {
    VectorStoreProvider.PINECONE: PineconeSink,
    VectorStoreProvider.ASTRA: AstraSink,
    VectorStoreProvider.ELASTICSEARCH: ElasticsearchSink,
}

# A registry mapping 'type' strings to their corresponding Chunker classes.
CHUNKER_REGISTRY = {
    "none": PassthroughChunker,
    "recursive_character": RecursiveCharacterChunker,
}


def resolve_embedding_model(config: EmbeddingModelConfig) -> BaseEmbedder:
    """
    Builds the embedder for an embedding model config.

    The model name is not checked against the provider; the forms do that.

    Raises:
        UnsupportedProviderError: If the provider has no embedder.
    """
    embedder_class = EMBEDDER_REGISTRY.get(config.provider)
    if not embedder_class:
        raise UnsupportedProviderError("embedding model", config.provider)

    logger.debug(
        f"Building embedder '{embedder_class.__name__}' for model '{config.model_name}'"
    )
    return embedder_class(config)


def build_sink(config, embedder: BaseEmbedder) -> BaseSink:
    """
    Builds the vector store sink selected by the config's 'provider' tag.

    Args:
        config: One of PineconeConfig, AstraConfig or ElasticsearchConfig.
        embedder (BaseEmbedder): The embedder whose client the store will use.

    Raises:
        UnsupportedProviderError: If the provider has no sink.
    """
    sink_class = SINK_REGISTRY.get(config.provider)
    if not sink_class:
        raise UnsupportedProviderError("vector store", config.provider)

    logger.debug(f"Building sink '{sink_class.__name__}'")
    return sink_class(config, embedder.client)


def dispatch_documents(
    config, embedder: BaseEmbedder, documents: List[Document]
) -> List[str]:
    """Writes the documents to the configured vector store in one bulk call."""
    sink = build_sink(config, embedder)
    logger.info(f"Sinking data to: {sink.__class__.__name__}")
    return sink.sink(documents)


def build_chunker(splitter_config: SplitterConfig):
    """
    Builds a chunker instance from a splitter configuration.

    Raises:
        ValueError: If the type is not found in the registry.
    """
    chunker_class = CHUNKER_REGISTRY.get(splitter_config.type)
    if not chunker_class:
        raise ValueError(f"'{splitter_config.type}' is not a valid splitter type.")

    logger.debug(
        f"Building component '{chunker_class.__name__}' with config: {splitter_config.config}"
    )
    return chunker_class(**splitter_config.config)
