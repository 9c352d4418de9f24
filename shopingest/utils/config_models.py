from enum import Enum
from typing import Annotated, Dict, Literal, List, Optional, Union

from pydantic import BaseModel, Field


class EmbeddingModelProvider(str, Enum):
    OPENAI = "OpenAI"
    GOOGLE = "Google"
    HUGGINGFACE = "HuggingFace"


class OpenAIEmbeddingModelName(str, Enum):
    TEXT_EMBEDDING_3_SMALL = "text-embedding-3-small"
    TEXT_EMBEDDING_3_LARGE = "text-embedding-3-large"
    TEXT_EMBEDDING_ADA_002 = "text-embedding-ada-002"


class GoogleEmbeddingModelName(str, Enum):
    TEXT_EMBEDDING_004 = "text-embedding-004"


class HuggingFaceEmbeddingModelName(str, Enum):
    DISTILBERT_BASE_NLI_MEAN_TOKENS = (
        "sentence-transformers/distilbert-base-nli-mean-tokens"
    )
    ALL_MINILM_L6_V2 = "sentence-transformers/all-MiniLM-L6-v2"
    PARAPHRASE_MULTILINGUAL_MINILM_L12_V2 = (
        "sentence-transformers/paraphrase-multilingual-MiniLM-L12-v2"
    )
    BGE_M3 = "BAAI/bge-m3"
    MULTILINGUAL_E5_LARGE = "intfloat/multilingual-e5-large"
    JINA_EMBEDDINGS_V2_BASE_EN = "jinaai/jina-embeddings-v2-base-en"
    MXBAI_EMBED_LARGE_V1 = "mixedbread-ai/mxbai-embed-large-v1"
    CODEBERT_BASE = "microsoft/codebert-base"


# Model names offered for each provider. Only the forms check membership.
EMBEDDING_MODEL_NAMES: Dict[EmbeddingModelProvider, List[str]] = {
    EmbeddingModelProvider.OPENAI: [m.value for m in OpenAIEmbeddingModelName],
    EmbeddingModelProvider.GOOGLE: [m.value for m in GoogleEmbeddingModelName],
    EmbeddingModelProvider.HUGGINGFACE: [
        m.value for m in HuggingFaceEmbeddingModelName
    ],
}


class VectorStoreProvider(str, Enum):
    PINECONE = "Pinecone"
    ASTRA = "Astra"
    ELASTICSEARCH = "Elasticsearch"


AstraSimilarityMetric = Literal["cosine", "euclidean", "dot_product"]
ElasticKnnEngine = Literal["hnsw"]
ElasticSimilarity = Literal["l2_norm", "dot_product", "cosine"]


class EmbeddingModelConfig(BaseModel):
    """Which embedding model to use and how to authenticate against it."""

    provider: EmbeddingModelProvider
    model_name: str
    api_key: str
    dimensions: Optional[int] = None


class PineconeConfig(BaseModel):
    provider: Literal["Pinecone"] = "Pinecone"
    api_key: str
    index_name: str


class AstraConfig(BaseModel):
    provider: Literal["Astra"] = "Astra"
    token: str
    endpoint: str
    collection: str
    dimensions: Optional[int] = None
    similarity_metric: Optional[AstraSimilarityMetric] = None


class ElasticsearchConfig(BaseModel):
    provider: Literal["Elasticsearch"] = "Elasticsearch"
    url: str
    index_name: str
    api_key: str
    engine: Optional[ElasticKnnEngine] = None
    similarity_metric: Optional[ElasticSimilarity] = None


# A vector store config is exactly one of the variants, selected by 'provider'.
VectorStoreConfig = Annotated[
    Union[PineconeConfig, AstraConfig, ElasticsearchConfig],
    Field(discriminator="provider"),
]


class ShopifySettings(BaseModel):
    """Connection details for the Shopify Admin API."""

    shop: Optional[str] = None
    access_token: Optional[str] = None
    api_version: Optional[str] = None


class SplitterConfig(BaseModel):
    """A model for the optional document splitter stage."""

    type: str = "none"
    config: Dict[str, int] = {}


class IngestionConfig(BaseModel):
    """The top-level model for the entire ingestion.yaml configuration."""

    shopify: ShopifySettings = ShopifySettings()
    vector_store: VectorStoreConfig
    embedding_model: EmbeddingModelConfig
    splitter: SplitterConfig = SplitterConfig()
