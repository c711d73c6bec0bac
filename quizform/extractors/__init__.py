"""Reference document text extraction."""

from .document_extractor import (
    DocumentExtractor,
    PDFExtractor,
    ReferenceResolver,
    TextFileExtractor,
)

__all__ = [
    "DocumentExtractor",
    "TextFileExtractor",
    "PDFExtractor",
    "ReferenceResolver",
]
