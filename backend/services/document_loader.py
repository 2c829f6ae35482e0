"""Document loading service for PDF text extraction."""
import logging
from typing import List
import fitz  # PyMuPDF

from config import MAX_UPLOAD_BYTES
from exceptions import ExtractionError, InvalidArgumentError

logger = logging.getLogger(__name__)


class DocumentLoader:
    """Extracts text from uploaded PDF files."""

    def __init__(self, max_bytes: int = MAX_UPLOAD_BYTES):
        """
        Initialize DocumentLoader.

        Args:
            max_bytes: Largest accepted upload size in bytes
        """
        self.max_bytes = max_bytes

    def extract_text(self, pdf_bytes: bytes, file_name: str = "document.pdf") -> str:
        """
        Extract the full text of a PDF, page by page.

        Args:
            pdf_bytes: Raw PDF file content
            file_name: Name used in log messages

        Returns:
            Page texts joined by blank lines; empty string if the PDF has no text

        Raises:
            InvalidArgumentError: If the upload is empty or too large
            ExtractionError: If the bytes are not a readable PDF
        """
        if not pdf_bytes:
            raise InvalidArgumentError("Uploaded file is empty")
        if len(pdf_bytes) > self.max_bytes:
            raise InvalidArgumentError(
                f"Uploaded file is {len(pdf_bytes)} bytes, limit is {self.max_bytes}"
            )

        try:
            pdf_document = fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as e:
            logger.error(f"Failed to open PDF {file_name}: {str(e)}")
            raise ExtractionError(f"Could not read {file_name} as a PDF: {str(e)}") from e

        try:
            pages: List[str] = []
            for page_num in range(len(pdf_document)):
                text = pdf_document[page_num].get_text().strip()
                if text:
                    pages.append(text)
        except Exception as e:
            logger.error(f"Failed to extract text from {file_name}: {str(e)}", exc_info=True)
            raise ExtractionError(f"Text extraction failed for {file_name}: {str(e)}") from e
        finally:
            pdf_document.close()

        full_text = "\n\n".join(pages)
        if not full_text:
            logger.warning(f"No readable text found in {file_name}")
        else:
            logger.info(f"Extracted {len(full_text)} characters from {file_name} ({len(pages)} pages with text)")
        return full_text
