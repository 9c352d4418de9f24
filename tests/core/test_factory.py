import pytest
from types import SimpleNamespace
from unittest.mock import patch, MagicMock

from shopingest.core.exceptions import UnsupportedProviderError
from shopingest.core.factory import (
    CHUNKER_REGISTRY,
    SINK_REGISTRY,
    build_chunker,
    build_sink,
    dispatch_documents,
    resolve_embedding_model,
)
from shopingest.components.chunkers import RecursiveCharacterChunker
from shopingest.components.embedders import GoogleEmbedder, OpenAIEmbedder
from shopingest.components.sinks import AstraSink, ElasticsearchSink, PineconeSink
from shopingest.utils.config_models import (
    AstraConfig,
    ElasticsearchConfig,
    EmbeddingModelConfig,
    PineconeConfig,
    SplitterConfig,
    VectorStoreProvider,
)


@pytest.fixture
def embedder():
    return MagicMock(client=MagicMock(name="embedding_client"))


def test_every_vector_store_provider_has_a_sink():
    assert set(SINK_REGISTRY) == set(VectorStoreProvider)


@patch("shopingest.components.embedders.OpenAIEmbeddings")
def test_resolve_openai(mock_openai):
    config = EmbeddingModelConfig(
        provider="OpenAI", model_name="text-embedding-3-small", api_key="k1"
    )
    embedder = resolve_embedding_model(config)
    assert isinstance(embedder, OpenAIEmbedder)
    mock_openai.assert_called_once_with(api_key="k1", model="text-embedding-3-small")


@patch("shopingest.components.embedders.GoogleGenerativeAIEmbeddings")
def test_resolve_google(mock_google):
    config = EmbeddingModelConfig(
        provider="Google", model_name="text-embedding-004", api_key="g1"
    )
    embedder = resolve_embedding_model(config)
    assert isinstance(embedder, GoogleEmbedder)
    assert mock_google.call_args[1]["google_api_key"] == "g1"
    assert mock_google.call_args[1]["model"] == "text-embedding-004"


def test_resolve_huggingface_is_unsupported():
    config = EmbeddingModelConfig(
        provider="HuggingFace",
        model_name="sentence-transformers/all-MiniLM-L6-v2",
        api_key="hf",
    )
    with pytest.raises(UnsupportedProviderError):
        resolve_embedding_model(config)


def test_resolve_unknown_embedding_provider():
    config = SimpleNamespace(provider="Cohere", model_name="embed", api_key="c")
    with pytest.raises(UnsupportedProviderError):
        resolve_embedding_model(config)


@pytest.mark.parametrize(
    "config, sink_class",
    [
        (PineconeConfig(api_key="k", index_name="idx"), PineconeSink),
        (AstraConfig(token="t", endpoint="https://db", collection="c"), AstraSink),
        (
            ElasticsearchConfig(url="http://es", index_name="i", api_key="k"),
            ElasticsearchSink,
        ),
    ],
)
@patch("shopingest.components.sinks.Elasticsearch")
@patch("shopingest.components.sinks.Pinecone")
def test_build_sink_routes_by_provider(
    mock_pinecone, mock_es, config, sink_class, embedder
):
    sink = build_sink(config, embedder)
    assert type(sink) is sink_class
    assert sink.embedding is embedder.client


def test_build_sink_unknown_provider(embedder):
    with pytest.raises(UnsupportedProviderError, match="Milvus"):
        build_sink(SimpleNamespace(provider="Milvus"), embedder)


@patch("shopingest.components.sinks.PineconeVectorStore")
@patch("shopingest.components.sinks.Pinecone")
def test_dispatch_documents_returns_ids(mock_pinecone, mock_store, embedder):
    mock_store.return_value.add_documents.return_value = ["id-1"]
    ids = dispatch_documents(
        PineconeConfig(api_key="k", index_name="idx"), embedder, [MagicMock()]
    )
    assert ids == ["id-1"]


def test_build_chunker_component():
    """Tests if the factory correctly builds a splitter component."""
    chunker = build_chunker(
        SplitterConfig(
            type="recursive_character", config={"chunk_size": 100, "chunk_overlap": 10}
        )
    )
    assert isinstance(chunker, RecursiveCharacterChunker)
    assert set(CHUNKER_REGISTRY) == {"none", "recursive_character"}


def test_build_chunker_invalid_type():
    with pytest.raises(ValueError):
        build_chunker(SplitterConfig(type="semantic"))
