"""
Bulk document ingestion script for Cognistore.

This script:
1. Loads every PDF from a directory (or the given files)
2. Extracts text with PyMuPDF
3. Splits the text into overlapping chunks
4. Stores documents and chunks for one user in Supabase

Usage:
    python ingest_documents.py --user-id USER_ID path/to/docs [more.pdf ...]
"""
import argparse
import sys
import logging
from pathlib import Path
from typing import List, Optional

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from config import DEFAULT_RETRIEVAL_CONFIG, RetrievalConfig
from exceptions import CognistoreError
from logger import setup_logging
from services.chunking_engine import ChunkingEngine
from services.document_loader import DocumentLoader
from services.document_store import DocumentStore
from services.ingestion_service import IngestionService

logger = logging.getLogger(__name__)


def collect_pdfs(paths: List[str]) -> List[Path]:
    """
    Expand directories into the PDF files they contain.

    Args:
        paths: Files or directories given on the command line

    Returns:
        Sorted, de-duplicated list of PDF paths
    """
    pdfs = set()
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            pdfs.update(p for p in path.iterdir() if p.suffix.lower() == ".pdf")
        elif path.suffix.lower() == ".pdf" and path.exists():
            pdfs.add(path)
        else:
            logger.warning(f"Skipping {raw}: not a PDF file or directory")
    return sorted(pdfs)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest PDF documents into Cognistore")
    parser.add_argument("paths", nargs="+", help="PDF files or directories of PDFs")
    parser.add_argument("--user-id", required=True, help="Owner of the ingested documents")
    parser.add_argument("--max-len", type=int, default=DEFAULT_RETRIEVAL_CONFIG.max_len,
                        help="Chunk width in characters")
    parser.add_argument("--overlap", type=int, default=DEFAULT_RETRIEVAL_CONFIG.overlap,
                        help="Characters shared by consecutive chunks")
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main ingestion process."""
    args = parse_args(argv)
    if args.json_logs:
        setup_logging()

    try:
        config = RetrievalConfig(
            max_len=args.max_len,
            overlap=args.overlap,
            k=DEFAULT_RETRIEVAL_CONFIG.k
        )
        service = IngestionService(
            document_store=DocumentStore(),
            chunking_engine=ChunkingEngine(config),
            document_loader=DocumentLoader()
        )

        pdfs = collect_pdfs(args.paths)
        if not pdfs:
            logger.error("No PDF files found")
            return 1
        logger.info(f"Ingesting {len(pdfs)} PDFs for user {args.user_id}")

        failures = 0
        total_chunks = 0
        for pdf in pdfs:
            try:
                result = service.ingest(args.user_id, pdf.name, pdf.read_bytes())
                total_chunks += result.chunks_created
                logger.info(f"✓ {pdf.name}: {result.chunks_created} chunks ({result.document.document_id})")
            except (CognistoreError, OSError) as e:
                failures += 1
                logger.error(f"✗ {pdf.name}: {e}")

        logger.info(f"Ingested {len(pdfs) - failures}/{len(pdfs)} documents, {total_chunks} chunks")
        return 1 if failures else 0

    except KeyboardInterrupt:
        logger.warning("Ingestion interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Ingestion failed: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
