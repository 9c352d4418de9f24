import logging

import streamlit as st

from shopingest.core.pipeline import build_product_source
from shopingest.ui.forms import VECTOR_STORE_FORMS, FormState, embedding_model_form
from shopingest.ui.wizard import IngestionWizard
from shopingest.utils.config_models import (
    EmbeddingModelProvider,
    ShopifySettings,
    VectorStoreProvider,
)

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="ShopIngest", layout="wide")
st.title("ShopIngest: Product Data Ingestion")

st.markdown(
    """
Load your store's products into a vector store in three steps: pick the vector
store, pick the embedding model, then start the ingestion. Products are loaded
into documents, embedded with the chosen model and stored in the vector store.
"""
)

if "wizard" not in st.session_state:
    st.session_state["wizard"] = IngestionWizard(notify=st.toast)
wizard: IngestionWizard = st.session_state["wizard"]


def render_form(form: FormState, key: str):
    """Draws every field of a form and copies the widget values back into it."""
    for name, field in form.fields.items():
        label = f"{field.label} *" if field.required else field.label
        widget_key = f"{key}_{name}"
        if field.options:
            value = st.selectbox(
                label,
                field.options,
                index=field.options.index(form.values[name]),
                key=widget_key,
            )
        else:
            value = st.text_input(
                label,
                value=form.values[name],
                type="password" if field.secret else "default",
                key=widget_key,
            )
        if value != form.values[name]:
            form.set(name, value)
        if name in form.errors:
            st.error(form.errors[name])


# --- 1. Vector Store Section ---
st.header("1. Set up Vector Store")
vector_store_provider = st.selectbox(
    "Vector store provider", [p.value for p in VectorStoreProvider]
)
form_key = f"form_{vector_store_provider}"
if form_key not in st.session_state:
    st.session_state[form_key] = VECTOR_STORE_FORMS[vector_store_provider]()
vector_store_form: FormState = st.session_state[form_key]

render_form(vector_store_form, form_key)
if st.button(
    "Save", key="save_vector_store", disabled=not vector_store_form.can_submit
):
    vector_store_form.submit(wizard.set_vector_store_config)
    st.rerun()

# --- 2. Embedding Model Section ---
st.header("2. Set up Embedding Model")
embedding_provider = EmbeddingModelProvider(
    st.selectbox("Embedding provider", [p.value for p in EmbeddingModelProvider])
)
form_key = f"embedding_{embedding_provider.value}"
if form_key not in st.session_state:
    st.session_state[form_key] = embedding_model_form(embedding_provider)
embedding_form: FormState = st.session_state[form_key]

render_form(embedding_form, form_key)
if st.button(
    "Save", key="save_embedding_model", disabled=not embedding_form.can_submit
):
    embedding_form.submit(wizard.set_embedding_model_config)
    st.rerun()

# --- 3. Start Data Ingestion Section ---
st.header("3. Start Data Ingestion")

if wizard.vector_store_config and wizard.embedding_model_config:
    st.info(
        f"Vector store: {wizard.vector_store_config.provider} | "
        f"Embedding model: {wizard.embedding_model_config.model_name}"
    )

if st.button(
    "Start Data Ingestion", disabled=not wizard.ready, key="open_confirmation"
):
    st.session_state["confirming"] = True

if st.session_state.get("confirming"):
    st.warning(
        "This action will start the data ingestion process. It may take some "
        "time to complete as it involves loading the data, generating "
        "embeddings, and storing them in the vector store.\n\n"
        "Please note that this action cannot be undone or cancelled. "
        "Generation of embeddings and storage in vector store will likely "
        "incur charges, please consider these before proceeding."
    )
    start_col, cancel_col = st.columns(2)
    if start_col.button("Start Data Ingestion", type="primary", key="confirm"):
        st.session_state["confirming"] = False
        with st.spinner("Data ingestion in progress. This may take some time."):
            try:
                source = build_product_source(ShopifySettings())
                wizard.start_ingestion(source.load_products)
                st.success("Data ingestion completed.")
            except Exception as e:
                st.error(f"An error occurred during data ingestion: {e}")
    if cancel_col.button("Cancel", key="cancel"):
        st.session_state["confirming"] = False
        st.rerun()

if wizard.products:
    with st.expander("Loaded products"):
        st.json(wizard.products)
if wizard.result:
    st.metric("Documents stored", wizard.result.document_count)
