"""
Exceptions raised by the ShopIngest core.
"""


class UnsupportedProviderError(ValueError):
    """Raised when a config names an embedding or vector store provider
    that has no implementation."""

    def __init__(self, kind: str, provider):
        self.kind = kind
        self.provider = getattr(provider, "value", provider)
        super().__init__(f"Unsupported {kind} provider: '{self.provider}'")


class ShopifyAPIError(RuntimeError):
    """The Shopify Admin API answered with GraphQL errors."""

    def __init__(self, errors):
        self.errors = errors
        messages = [
            e.get("message", str(e)) if isinstance(e, dict) else str(e)
            for e in errors
        ]
        super().__init__(f"Shopify GraphQL errors: {'; '.join(messages)}")
