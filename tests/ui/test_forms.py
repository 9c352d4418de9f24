"""
Tests for the configuration form state.
"""

from unittest.mock import MagicMock

from shopingest.ui.forms import (
    MAX_DIMENSIONS,
    astra_form,
    elasticsearch_form,
    embedding_model_form,
    pinecone_form,
)
from shopingest.utils.config_models import (
    EMBEDDING_MODEL_NAMES,
    AstraConfig,
    EmbeddingModelProvider,
    PineconeConfig,
)


def test_empty_required_field_keeps_save_disabled():
    form = pinecone_form()
    set_vector_store_config = MagicMock()

    form.set("api_key", "k2")

    assert not form.can_submit
    assert form.submit(set_vector_store_config) is False
    set_vector_store_config.assert_not_called()


def test_pristine_form_cannot_submit():
    form = astra_form()
    assert not form.is_dirty
    assert not form.can_submit


def test_pinecone_form_submits_config():
    form = pinecone_form()
    set_vector_store_config = MagicMock()
    form.set("api_key", "k2")
    form.set("index_name", "idx")

    assert form.can_submit
    assert form.submit(set_vector_store_config) is True
    config = set_vector_store_config.call_args[0][0]
    assert isinstance(config, PineconeConfig)
    assert config.index_name == "idx"


def test_astra_form_converts_dimensions():
    form = astra_form()
    on_submit = MagicMock()
    form.set("token", "t")
    form.set("endpoint", "https://db")
    form.set("collection", "products")
    form.set("dimensions", "1536")

    form.submit(on_submit)

    config = on_submit.call_args[0][0]
    assert isinstance(config, AstraConfig)
    assert config.dimensions == 1536
    assert config.similarity_metric == "cosine"


def test_astra_form_rejects_out_of_range_dimensions():
    form = astra_form()
    on_submit = MagicMock()
    form.set("token", "t")
    form.set("endpoint", "https://db")
    form.set("collection", "products")
    form.set("dimensions", "9000")

    assert "dimensions" in form.errors
    assert form.submit(on_submit) is False
    on_submit.assert_not_called()


def test_astra_form_leaves_dimensions_unset():
    form = astra_form()
    on_submit = MagicMock()
    for name, value in [("token", "t"), ("endpoint", "e"), ("collection", "c")]:
        form.set(name, value)

    form.submit(on_submit)

    assert on_submit.call_args[0][0].dimensions is None


def test_elasticsearch_form_requires_all_connection_fields():
    form = elasticsearch_form()
    form.set("url", "http://es")
    form.set("index_name", "products")
    assert not form.can_submit
    form.set("api_key", "k")
    assert form.can_submit


def test_embedding_form_rejects_model_from_other_provider():
    form = embedding_model_form(EmbeddingModelProvider.OPENAI)
    on_submit = MagicMock()
    form.set("api_key", "k1")
    form.set("model_name", "text-embedding-004")

    assert form.submit(on_submit) is False
    assert "model_name" in form.errors
    on_submit.assert_not_called()


def test_embedding_form_submits_config():
    form = embedding_model_form(EmbeddingModelProvider.GOOGLE)
    on_submit = MagicMock()
    form.set("api_key", "g1")

    assert form.submit(on_submit) is True
    config = on_submit.call_args[0][0]
    assert config.provider == EmbeddingModelProvider.GOOGLE
    assert config.model_name == "text-embedding-004"
    assert config.dimensions is None


def test_astra_form_rejects_metric_outside_options():
    form = astra_form()
    on_submit = MagicMock()
    for name, value in [("token", "t"), ("endpoint", "e"), ("collection", "c")]:
        form.set(name, value)
    form.set("similarity_metric", "l2_norm")

    assert "similarity_metric" in form.errors
    assert form.submit(on_submit) is False
    assert "similarity_metric" in form.errors
    on_submit.assert_not_called()


def test_embedding_form_has_no_provider_field():
    form = embedding_model_form(EmbeddingModelProvider.OPENAI)
    assert "provider" not in form.fields
    assert form.fields["model_name"].options == EMBEDDING_MODEL_NAMES[
        EmbeddingModelProvider.OPENAI
    ]


def test_embedding_form_rejects_unknown_model_name():
    form = embedding_model_form(EmbeddingModelProvider.OPENAI)
    on_submit = MagicMock()
    form.set("api_key", "k1")
    form.set("model_name", "cohere-embed-v3")

    assert form.submit(on_submit) is False
    assert "model_name" in form.errors
    on_submit.assert_not_called()


def test_dimensions_upper_bound_is_accepted():
    form = astra_form()
    form.set("dimensions", str(MAX_DIMENSIONS))
    assert "dimensions" not in form.errors

    form.set("dimensions", str(MAX_DIMENSIONS + 1))
    assert form.errors["dimensions"] == (
        f"Dimensions must be an integer between 1 and {MAX_DIMENSIONS}."
    )
