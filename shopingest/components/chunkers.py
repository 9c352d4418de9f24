"""
Document splitting components for the ShopIngest pipeline.

Splitting sits between loading and embedding. Product documents are small, so
the default splitter passes them through unchanged; longer content can be
split with the recursive character splitter.
"""

from abc import ABC, abstractmethod
import logging
from typing import List

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

logger = logging.getLogger(__name__)


class BaseChunker(ABC):
    """Abstract base class for all chunker components."""

    @abstractmethod
    def chunk(self, document: Document) -> List[Document]:
        """
        Chunks a single document into a list of smaller documents.

        Args:
            document (Document): The document to be chunked.

        Returns:
            List[Document]: A list of chunked documents.
        """
        pass

    def split(self, documents: List[Document]) -> List[Document]:
        """Chunks every document and flattens the result."""
        chunks = []
        for document in documents:
            chunks.extend(self.chunk(document))
        return chunks


class PassthroughChunker(BaseChunker):
    """A chunker that keeps each document whole."""

    def chunk(self, document: Document) -> List[Document]:
        return [document]


class RecursiveCharacterChunker(BaseChunker):
    """
    A chunker that splits text recursively by a list of specified characters.

    This method is effective for maintaining semantic coherence by trying to
    split on sentence- and paragraph-level boundaries first.
    """

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 100):
        """
        Initializes the chunker with a specific chunk size and overlap.

        Args:
            chunk_size (int): The maximum size of each chunk (measured by length).
            chunk_overlap (int): The number of characters to overlap between chunks.
        """
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._text_splitter = RecursiveCharacterTextSplitter(
            chunk_size=self.chunk_size,
            chunk_overlap=self.chunk_overlap,
            length_function=len,
        )
        logger.debug(
            f"Initialized RecursiveCharacterChunker with size={chunk_size}, overlap={chunk_overlap}"
        )

    def chunk(self, document: Document) -> List[Document]:
        """Splits a document's content into chunks using a recursive character splitter."""
        source = document.metadata.get("source", "unknown")
        if not document.page_content or not document.page_content.strip():
            logger.warning(
                f"Document from source '{source}' is empty. Skipping chunking."
            )
            return []

        text_chunks = self._text_splitter.split_text(document.page_content)

        chunked_documents = []
        for i, text_chunk in enumerate(text_chunks):
            new_metadata = document.metadata.copy()
            new_metadata["chunk_index"] = i + 1
            chunked_documents.append(
                Document(page_content=text_chunk, metadata=new_metadata)
            )

        logger.debug(f"Created {len(chunked_documents)} chunks from source: {source}")
        return chunked_documents
