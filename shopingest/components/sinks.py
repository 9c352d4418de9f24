"""
Vector store sink components for the ShopIngest pipeline.

This module provides classes for writing product documents to hosted vector
stores. Each sink opens a client for its provider and hands the documents to
the LangChain integration, which computes the embeddings with the configured
embedding client while loading them.
"""

from abc import ABC, abstractmethod
import logging
from typing import List

from langchain_core.documents import Document
from langchain_core.embeddings import Embeddings
from pinecone import Pinecone
from langchain_pinecone import PineconeVectorStore
from astrapy import DataAPIClient
from langchain_astradb import AstraDBVectorStore
from langchain_astradb.utils.astradb import SetupMode
from elasticsearch import Elasticsearch
from elasticsearch.helpers.vectorstore import DenseVectorStrategy, DistanceMetric
from langchain_elasticsearch import ElasticsearchStore

from ..utils.config_models import (
    AstraConfig,
    ElasticsearchConfig,
    PineconeConfig,
)

logger = logging.getLogger(__name__)


class BaseSink(ABC):
    """Abstract base class for all vector store sink components."""

    def __init__(self, embedding: Embeddings):
        self.embedding = embedding

    @abstractmethod
    def sink(self, documents: List[Document]) -> List[str]:
        """
        Writes all documents to the vector store in a single bulk call.

        Args:
            documents (List[Document]): The documents to embed and store.

        Returns:
            List[str]: The ids assigned by the vector store.
        """
        pass

    @abstractmethod
    def test_connection(self):
        """
        Tests the connection to the vector store to ensure it is accessible.

        Raises:
            Exception: If the connection test fails.
        """
        pass


class PineconeSink(BaseSink):
    """A sink that writes documents to a Pinecone index."""

    def __init__(self, config: PineconeConfig, embedding: Embeddings):
        super().__init__(embedding)
        self.index_name = config.index_name
        self.client = Pinecone(api_key=config.api_key)
        logger.debug(f"Initialized PineconeSink with index='{self.index_name}'")

    def sink(self, documents: List[Document]) -> List[str]:
        """Sinks the given documents into the Pinecone index."""
        if not documents:
            logger.warning("No documents provided to sink. Aborting.")
            return []

        logger.info(
            f"Sinking {len(documents)} documents to Pinecone index '{self.index_name}'"
        )
        index = self.client.Index(self.index_name)
        store = PineconeVectorStore(index=index, embedding=self.embedding)
        ids = store.add_documents(documents)
        logger.info("Finished sinking data to Pinecone.")
        return ids

    def test_connection(self):
        logger.info(f"Testing connection to Pinecone index '{self.index_name}'")
        try:
            self.client.describe_index(self.index_name)
            logger.info("Connection to Pinecone successful.")
        except Exception as e:
            logger.error(f"Failed to connect to Pinecone: {e}", exc_info=True)
            raise ConnectionError(f"Failed to connect to Pinecone: {e}")


class AstraSink(BaseSink):
    """
    A sink that writes documents to a DataStax Astra DB collection.

    When a vector dimension is configured, the collection is created up front
    with the configured dimension and metric. Otherwise the LangChain store
    sets the collection up itself, probing the embedding for its dimension.
    """

    def __init__(self, config: AstraConfig, embedding: Embeddings):
        super().__init__(embedding)
        self.token = config.token
        self.endpoint = config.endpoint
        self.collection = config.collection
        self.collection_options = {}
        if config.dimensions is not None:
            self.collection_options["dimension"] = config.dimensions
        if config.similarity_metric is not None:
            self.collection_options["metric"] = config.similarity_metric
        logger.debug(
            f"Initialized AstraSink with endpoint='{self.endpoint}', "
            f"collection='{self.collection}', options={self.collection_options}"
        )

    def _open_database(self):
        return DataAPIClient(self.token).get_database(self.endpoint)

    def _open_store(self) -> AstraDBVectorStore:
        if "dimension" in self.collection_options:
            database = self._open_database()
            database.create_collection(
                self.collection, check_exists=False, **self.collection_options
            )
            return AstraDBVectorStore(
                embedding=self.embedding,
                collection_name=self.collection,
                token=self.token,
                api_endpoint=self.endpoint,
                setup_mode=SetupMode.OFF,
            )
        return AstraDBVectorStore(
            embedding=self.embedding,
            collection_name=self.collection,
            token=self.token,
            api_endpoint=self.endpoint,
            metric=self.collection_options.get("metric"),
        )

    def sink(self, documents: List[Document]) -> List[str]:
        """Sinks the given documents into the Astra DB collection."""
        if not documents:
            logger.warning("No documents provided to sink. Aborting.")
            return []

        logger.info(
            f"Sinking {len(documents)} documents to Astra collection '{self.collection}'"
        )
        store = self._open_store()
        ids = store.add_documents(documents)
        logger.info("Finished sinking data to Astra DB.")
        return ids

    def test_connection(self):
        logger.info(f"Testing connection to Astra DB at {self.endpoint}")
        try:
            self._open_database().list_collection_names()
            logger.info("Connection to Astra DB successful.")
        except Exception as e:
            logger.error(f"Failed to connect to Astra DB: {e}", exc_info=True)
            raise ConnectionError(f"Failed to connect to Astra DB: {e}")


# Elasticsearch similarity names mapped onto the dense vector distance metrics.
ELASTIC_SIMILARITIES = {
    "cosine": DistanceMetric.COSINE,
    "dot_product": DistanceMetric.DOT_PRODUCT,
    "l2_norm": DistanceMetric.EUCLIDEAN_DISTANCE,
}

# Dense vector fields are indexed with HNSW for approximate kNN search.
ELASTIC_KNN_ENGINES = {"hnsw": DenseVectorStrategy}


class ElasticsearchSink(BaseSink):
    """A sink that writes documents to an Elasticsearch index."""

    def __init__(self, config: ElasticsearchConfig, embedding: Embeddings):
        super().__init__(embedding)
        self.url = config.url
        self.index_name = config.index_name
        self.engine = config.engine or "hnsw"
        self.similarity_metric = config.similarity_metric or "cosine"
        self.client = Elasticsearch(self.url, api_key=config.api_key)
        logger.debug(
            f"Initialized ElasticsearchSink with url='{self.url}', "
            f"index='{self.index_name}', engine='{self.engine}', "
            f"similarity='{self.similarity_metric}'"
        )

    def _strategy(self):
        strategy_class = ELASTIC_KNN_ENGINES[self.engine]
        return strategy_class(distance=ELASTIC_SIMILARITIES[self.similarity_metric])

    def sink(self, documents: List[Document]) -> List[str]:
        """Sinks the given documents into the Elasticsearch index."""
        if not documents:
            logger.warning("No documents provided to sink. Aborting.")
            return []

        logger.info(
            f"Sinking {len(documents)} documents to Elasticsearch index "
            f"'{self.index_name}' at {self.url}"
        )
        store = ElasticsearchStore(
            index_name=self.index_name,
            embedding=self.embedding,
            es_connection=self.client,
            strategy=self._strategy(),
        )
        ids = store.add_documents(documents)
        logger.info("Finished sinking data to Elasticsearch.")
        return ids

    def test_connection(self):
        logger.info(f"Testing connection to Elasticsearch at {self.url}")
        try:
            self.client.info()
            logger.info("Connection to Elasticsearch successful.")
        except Exception as e:
            logger.error(f"Failed to connect to Elasticsearch: {e}", exc_info=True)
            raise ConnectionError(f"Failed to connect to Elasticsearch: {e}")
