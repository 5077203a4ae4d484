"""PDF download and text-layer extraction."""

import asyncio
from io import BytesIO
from typing import Optional

import httpx
import pdfplumber

from chemlabel.core.config import settings
from chemlabel.core.exceptions import DocumentFetchError, TextExtractionError
from chemlabel.services.extraction.text_cleaner import TextCleaner
from chemlabel.utils.logging import get_logger

LOGGER = get_logger(__name__)

PDF_MAGIC = b"%PDF-"


class PDFTextService:
    """Downloads SDS PDFs and pulls their text layer with pdfplumber.

    Bytes without a PDF header are decoded leniently as text so that plain
    text uploads still work. Scanned image-only PDFs have no text layer and
    come back near-empty, which the caller reports as unreadable.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        min_text_chars: Optional[int] = None,
    ):
        self.timeout = timeout if timeout is not None else settings.extraction.http_timeout
        self.user_agent = user_agent or settings.extraction.user_agent
        self.min_text_chars = min_text_chars if min_text_chars is not None else settings.extraction.min_readable_chars

    async def download(self, document_url: str) -> bytes:
        """Download a document.

        Args:
            document_url: Public or signed URL of the PDF

        Returns:
            bytes: Document content

        Raises:
            DocumentFetchError: If the download fails or returns no content
        """
        headers = {"User-Agent": self.user_agent, "Accept": "application/pdf,*/*"}

        LOGGER.debug("Downloading document", extra={"document_url": document_url})

        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(document_url, headers=headers)
                response.raise_for_status()

            except httpx.HTTPStatusError as e:
                LOGGER.error(
                    "Failed to download document - HTTP error",
                    exc_info=True,
                    extra={"document_url": document_url, "status_code": e.response.status_code},
                )
                raise DocumentFetchError(
                    f"Failed to download PDF: HTTP {e.response.status_code}", original_error=e
                ) from e

            except httpx.HTTPError as e:
                LOGGER.error(
                    "Failed to download document",
                    exc_info=True,
                    extra={"document_url": document_url, "error": str(e)},
                )
                raise DocumentFetchError(f"Failed to download PDF: {str(e)}", original_error=e) from e

        content = response.content
        if not content:
            raise DocumentFetchError("Downloaded PDF is empty")

        content_type = response.headers.get("content-type", "")
        if "pdf" not in content_type.lower():
            LOGGER.warning(
                "Unexpected content type",
                extra={"content_type": content_type, "document_url": document_url},
            )

        LOGGER.info(
            "Document downloaded",
            extra={"document_url": document_url, "size_bytes": len(content)},
        )
        return content

    async def extract_text(self, pdf_bytes: bytes) -> str:
        """Extract cleaned text from PDF bytes.

        Raises:
            TextExtractionError: If no bytes were given
        """
        if not pdf_bytes:
            raise TextExtractionError("No document content to extract text from")

        if not pdf_bytes.lstrip().startswith(PDF_MAGIC):
            LOGGER.info("Document is not a PDF, decoding as text", extra={"size_bytes": len(pdf_bytes)})
            return TextCleaner.clean(pdf_bytes.decode("utf-8", errors="ignore"))

        text = ""
        try:
            text = await asyncio.to_thread(self._read_text_layer, pdf_bytes)
        except Exception as e:
            # Corrupt PDFs are reported as unreadable rather than failing the request
            LOGGER.warning(
                "pdfplumber could not read document",
                exc_info=True,
                extra={"error": str(e), "size_bytes": len(pdf_bytes)},
            )

        cleaned = TextCleaner.clean(text)
        if len(cleaned) < self.min_text_chars:
            LOGGER.info(
                "PDF text layer is near-empty, document is likely a scanned image",
                extra={"text_chars": len(cleaned)},
            )
        return cleaned

    @staticmethod
    def _read_text_layer(pdf_bytes: bytes) -> str:
        with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
        return "\n".join(pages)
