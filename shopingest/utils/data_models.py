"""
Core data models for the ShopIngest pipeline.

Documents flowing between components are LangChain ``Document`` objects,
since the vector store integrations consume them directly. This module holds
the remaining structures passed back to callers.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class IngestionResult:
    """
    The outcome of a single ingestion run.

    Attributes:
        provider (str): The vector store provider the documents were written to.
        document_count (int): How many documents were handed to the store.
        ids (List[str]): The ids the vector store assigned to the documents.
    """

    provider: str
    document_count: int
    ids: List[str] = field(default_factory=list)
