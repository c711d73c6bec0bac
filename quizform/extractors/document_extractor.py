"""Plain-text extraction from reference documents."""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

import pdfplumber

from quizform.errors import ExtractionError

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 10
DOCUMENT_ID_PATTERN = re.compile(r"[-\w]{25,}")
TEXT_SUFFIXES = {".txt", ".md", ".markdown", ".text"}


class DocumentExtractor(ABC):
    """Turns a reference (path, URL or document id) into plain text."""

    @abstractmethod
    def can_handle(self, path: Path) -> bool:
        """Check whether this extractor reads the given file."""

    @abstractmethod
    def read(self, path: Path) -> str:
        """Return the file's text."""

    def extract(self, path: Path) -> str:
        """
        Read the file and check there is enough text to quiz on.

        Raises:
            ExtractionError: if the file is unreadable or shorter than 10 characters
        """
        try:
            text = self.read(path)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            raise ExtractionError(f"Cannot read document {path}: {e}") from e
        if len(text) < MIN_TEXT_LENGTH:
            raise ExtractionError(f"Document {path} holds too little text ({len(text)} chars)")
        return text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class TextFileExtractor(DocumentExtractor):
    def can_handle(self, path: Path) -> bool:
        return path.suffix.lower() in TEXT_SUFFIXES

    def read(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")


class PDFExtractor(DocumentExtractor):
    def can_handle(self, path: Path) -> bool:
        return path.suffix.lower() == ".pdf"

    def read(self, path: Path) -> str:
        try:
            with pdfplumber.open(path) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except OSError:
            raise
        except Exception as e:
            # pdfminer raises its own exception types for damaged files
            raise ValueError(f"Invalid PDF: {e}") from e
        logger.debug("Read %d page(s) from %s", len(pages), path)
        return "\n".join(pages).strip()


class ReferenceResolver:
    """
    Picks the document and extractor for a reference.

    A reference is either a file path, or a URL/id containing a document id
    (25+ word characters or dashes) looked up in ``document_dir``.
    """

    def __init__(
        self,
        document_dir: str | Path = "documents",
        extractors: list[DocumentExtractor] | None = None,
    ):
        self.document_dir = Path(document_dir)
        self.extractors = extractors or [TextFileExtractor(), PDFExtractor()]

    def resolve(self, reference: str) -> Path:
        path = Path(reference).expanduser()
        if path.is_file():
            return path

        match = DOCUMENT_ID_PATTERN.search(reference)
        if match:
            document_id = match.group(0)
            for candidate in sorted(self.document_dir.glob(f"{document_id}.*")):
                if candidate.is_file():
                    return candidate
        raise ExtractionError(f"Cannot find document for reference {reference!r}")

    def extract(self, reference: str) -> str:
        """
        Extract plain text for a reference.

        Raises:
            ExtractionError: the document is missing, unsupported, unreadable or too short
        """
        if not reference:
            raise ExtractionError("Empty reference")
        path = self.resolve(reference)
        for extractor in self.extractors:
            if extractor.can_handle(path):
                return extractor.extract(path)
        raise ExtractionError(f"Unsupported document type: {path.suffix or path.name}")
