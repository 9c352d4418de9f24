"""
Data source components for the ShopIngest pipeline.

This module fetches product data from the Shopify Admin GraphQL API and
converts the raw response into LangChain Document objects, one per product.
"""

import json
import logging
from typing import Any, Dict, List

import requests
from langchain_core.documents import Document

from ..core.exceptions import ShopifyAPIError

logger = logging.getLogger(__name__)

PRODUCTS_QUERY = """
query {
  products(first: 10) {
    edges {
      node {
        id
        title
        handle
      }
    }
  }
}
"""

SHOP_QUERY = "query { shop { name } }"

DOCUMENT_SOURCE = "shopify"

DEFAULT_API_VERSION = "2024-07"


class ShopifyProductSource:
    """
    Loads products from a store through the Shopify Admin GraphQL API.
    """

    def __init__(self, shop: str, access_token: str, api_version: str = DEFAULT_API_VERSION):
        if not shop or not access_token:
            raise ValueError(
                "A Shopify shop domain and access token are required. Set them in "
                "the 'shopify' section or via SHOPIFY_SHOP / SHOPIFY_ACCESS_TOKEN."
            )
        self.shop = shop
        self.access_token = access_token
        self.api_version = api_version
        self.url = f"https://{shop}/admin/api/{api_version}/graphql.json"
        self.headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": access_token,
        }
        logger.debug(f"Initialized ShopifyProductSource for shop='{shop}'")

    def _query(self, query: str) -> Dict[str, Any]:
        response = requests.post(
            self.url, json={"query": query}, headers=self.headers, timeout=30
        )
        response.raise_for_status()
        body = response.json()
        if body.get("errors"):
            logger.error(f"Shopify returned GraphQL errors: {body['errors']}")
            raise ShopifyAPIError(body["errors"])
        return body

    def load_products(self) -> Dict[str, Any]:
        """Runs the products query and returns the raw product connection."""
        logger.info(f"Fetching products from Shopify shop '{self.shop}'")
        body = self._query(PRODUCTS_QUERY)
        products = body["data"]["products"]
        logger.info(f"Fetched {len(products.get('edges', []))} products.")
        return {"products": products}

    def test_connection(self):
        logger.info(f"Testing connection to Shopify shop '{self.shop}'")
        body = self._query(SHOP_QUERY)
        logger.info(f"Connection to Shopify successful: {body['data']['shop']['name']}")


def _extract_products(payload: Any) -> List[Dict[str, Any]]:
    if isinstance(payload, (str, bytes)):
        payload = json.loads(payload)
    if isinstance(payload, dict):
        if "products" in payload:
            return _extract_products(payload["products"])
        if "edges" in payload:
            return [edge["node"] for edge in payload["edges"]]
        raise ValueError(
            "Product payload must contain 'products' or 'edges', "
            f"got keys: {sorted(payload.keys())}"
        )
    if isinstance(payload, list):
        return payload
    raise TypeError(f"Unsupported product payload type: {type(payload).__name__}")


def load_product_documents(payload: Any) -> List[Document]:
    """
    Parses a raw product payload into one Document per product.

    The payload may be the fetch response (``{"products": {"edges": [...]}}``),
    a bare GraphQL connection, a list of product dicts, or a JSON string of
    any of these. The document content is the product serialised as JSON.
    """
    products = _extract_products(payload)

    documents = []
    for seq_num, product in enumerate(products, start=1):
        metadata = {"source": DOCUMENT_SOURCE, "seq_num": seq_num}
        for key in ("id", "handle"):
            if key in product:
                metadata[key] = product[key]
        documents.append(
            Document(page_content=json.dumps(product), metadata=metadata)
        )

    logger.info(f"Loaded {len(documents)} product documents.")
    return documents
