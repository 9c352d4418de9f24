import pytest
from unittest.mock import patch, MagicMock

from shopingest.ui.wizard import IngestionWizard
from shopingest.utils.config_models import EmbeddingModelConfig, PineconeConfig
from shopingest.utils.data_models import IngestionResult


@pytest.fixture
def wizard():
    wizard = IngestionWizard(notify=MagicMock())
    wizard.set_vector_store_config(PineconeConfig(api_key="k2", index_name="idx"))
    wizard.set_embedding_model_config(
        EmbeddingModelConfig(
            provider="OpenAI", model_name="text-embedding-3-small", api_key="k1"
        )
    )
    return wizard


def test_wizard_not_ready_without_configs():
    wizard = IngestionWizard(notify=MagicMock())
    load_products = MagicMock()

    assert wizard.start_ingestion(load_products) is None
    load_products.assert_not_called()


@patch("shopingest.ui.wizard.ingest_products")
def test_start_ingestion_loads_then_ingests(mock_ingest, wizard):
    mock_ingest.return_value = IngestionResult(provider="Pinecone", document_count=1)
    payload = {"products": {"edges": [{"node": {"id": "1"}}]}}

    result = wizard.start_ingestion(lambda: payload)

    mock_ingest.assert_called_once_with(
        wizard.vector_store_config, wizard.embedding_model_config, payload
    )
    assert result.document_count == 1
    assert not wizard.in_progress
    wizard.notify.assert_any_call("Products loaded successfully")


@patch("shopingest.ui.wizard.ingest_products")
def test_start_ingestion_ignored_while_in_progress(mock_ingest, wizard):
    wizard.in_progress = True
    assert wizard.start_ingestion(MagicMock()) is None
    mock_ingest.assert_not_called()


@patch("shopingest.ui.wizard.ingest_products")
def test_start_ingestion_reports_failure(mock_ingest, wizard):
    mock_ingest.side_effect = RuntimeError("quota exceeded")

    with pytest.raises(RuntimeError):
        wizard.start_ingestion(lambda: [])

    assert not wizard.in_progress
    wizard.notify.assert_called_with("Data ingestion failed: quota exceeded")
