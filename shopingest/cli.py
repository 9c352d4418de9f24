"""
Command-Line Interface for ShopIngest.
"""

import json
import logging
from pathlib import Path

import typer
from typing_extensions import Annotated

from .core.factory import (
    CHUNKER_REGISTRY,
    EMBEDDER_REGISTRY,
    SINK_REGISTRY,
    build_sink,
    resolve_embedding_model,
)
from .core.pipeline import build_product_source, run_pipeline
from .utils.config import load_config
from .utils.config_models import EMBEDDING_MODEL_NAMES


logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="Load Shopify products into a vector store.")

DEFAULT_YAML_CONTENT = """# Default ShopIngest Configuration
# Shop and access token may also come from SHOPIFY_SHOP / SHOPIFY_ACCESS_TOKEN.
shopify:
  shop: "your-store.myshopify.com"
  api_version: "2024-07"

vector_store:
  provider: Pinecone
  api_key: "your-pinecone-api-key"
  index_name: "products"

embedding_model:
  provider: OpenAI
  model_name: "text-embedding-3-small"
  api_key: "your-openai-api-key"

splitter:
  type: none
"""


@app.command()
def run(
    config_path: str = typer.Option(
        "ingestion.yaml",
        "-c",
        help="Path to the ingestion YAML configuration file.",
    )
):
    """Fetches products from Shopify and loads them into the vector store."""
    try:
        result = run_pipeline(config_path=config_path)
    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        raise typer.Exit(code=1)
    logger.info(
        f"Stored {result.document_count} documents in {result.provider}."
    )


@app.command()
def init():
    """Writes a default ingestion.yaml into the current directory."""
    config_file = Path("ingestion.yaml")
    if config_file.exists():
        logger.warning("'ingestion.yaml' already exists.")
        return
    config_file.write_text(DEFAULT_YAML_CONTENT)
    logger.info("Created default 'ingestion.yaml'.")


@app.command(name="fetch-products")
def fetch_products(
    config_path: str = typer.Option("ingestion.yaml", "-c", help="Config path."),
):
    """Prints the raw product payload returned by Shopify."""
    config = load_config(config_path)
    try:
        products = build_product_source(config.shopify).load_products()
    except Exception as e:
        logger.error(f"Could not fetch products: {e}", exc_info=True)
        raise typer.Exit(code=1)
    print(json.dumps(products, indent=2))


@app.command(name="list-components")
def list_components():
    """Lists all available providers and splitters."""

    def print_registry(title, names):
        print(f"\n--- {title} ---")
        for name in sorted(names):
            print(f"  - {name}")

    print_registry("Vector Stores", [p.value for p in SINK_REGISTRY])
    print_registry("Embedding Providers", [p.value for p in EMBEDDER_REGISTRY])
    for provider in EMBEDDER_REGISTRY:
        print_registry(f"{provider.value} Models", EMBEDDING_MODEL_NAMES[provider])
    print_registry("Splitters", CHUNKER_REGISTRY.keys())


@app.command(name="test-connection")
def test_connection(
    component: Annotated[
        str, typer.Argument(help="Component to test (source, embedder or sink)")
    ],
    config_path: str = typer.Option("ingestion.yaml", "-c", help="Config path."),
):
    """Tests the connection for a specified component."""
    logger.info(f"Testing connection for '{component}'...")
    config = load_config(config_path)
    try:
        if component == "source":
            comp_obj = build_product_source(config.shopify)
        elif component == "embedder":
            comp_obj = resolve_embedding_model(config.embedding_model)
        elif component == "sink":
            embedder = resolve_embedding_model(config.embedding_model)
            comp_obj = build_sink(config.vector_store, embedder)
        else:
            logger.error(f"Unknown component: '{component}'")
            raise typer.Exit(code=1)
        comp_obj.test_connection()
    except typer.Exit:
        raise
    except Exception as e:
        logger.error(f"Connection test failed: {e}", exc_info=True)
        raise typer.Exit(code=1)
