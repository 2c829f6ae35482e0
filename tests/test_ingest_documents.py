"""Tests for the bulk ingestion script."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from unittest.mock import Mock, patch
import ingest_documents
from exceptions import ExtractionError


@pytest.fixture
def pdf_dir(tmp_path):
    (tmp_path / "b.pdf").write_bytes(b"%PDF-b")
    (tmp_path / "a.PDF").write_bytes(b"%PDF-a")
    (tmp_path / "notes.txt").write_text("not a pdf")
    return tmp_path


def test_collect_pdfs_from_directory(pdf_dir):
    pdfs = ingest_documents.collect_pdfs([str(pdf_dir)])
    assert [p.name for p in pdfs] == ["a.PDF", "b.pdf"]


def test_collect_pdfs_deduplicates_and_skips_other_files(pdf_dir):
    pdfs = ingest_documents.collect_pdfs([
        str(pdf_dir),
        str(pdf_dir / "b.pdf"),
        str(pdf_dir / "notes.txt"),
        str(pdf_dir / "missing.pdf"),
    ])
    assert [p.name for p in pdfs] == ["a.PDF", "b.pdf"]


def test_parse_args_defaults():
    args = ingest_documents.parse_args(["--user-id", "user_1", "docs"])
    assert args.user_id == "user_1"
    assert args.paths == ["docs"]
    assert args.max_len > 0


@patch("ingest_documents.DocumentStore")
@patch("ingest_documents.IngestionService")
def test_main_ingests_every_pdf(mock_service_class, mock_store_class, pdf_dir):
    service = mock_service_class.return_value
    service.ingest.return_value = Mock(chunks_created=2, document=Mock(document_id="node_1"))

    exit_code = ingest_documents.main(["--user-id", "user_1", str(pdf_dir)])

    assert exit_code == 0
    assert service.ingest.call_count == 2
    service.ingest.assert_any_call("user_1", "b.pdf", b"%PDF-b")


@patch("ingest_documents.DocumentStore")
@patch("ingest_documents.IngestionService")
def test_main_reports_failures(mock_service_class, mock_store_class, pdf_dir):
    service = mock_service_class.return_value
    service.ingest.side_effect = [
        ExtractionError("unreadable"),
        Mock(chunks_created=1, document=Mock(document_id="node_2")),
    ]

    assert ingest_documents.main(["--user-id", "user_1", str(pdf_dir)]) == 1
    assert service.ingest.call_count == 2


def test_main_without_pdfs(tmp_path):
    with patch("ingest_documents.DocumentStore"):
        assert ingest_documents.main(["--user-id", "user_1", str(tmp_path)]) == 1


def test_main_rejects_invalid_chunk_config(pdf_dir):
    with patch("ingest_documents.DocumentStore"):
        assert ingest_documents.main(["--user-id", "user_1", "--max-len", "0", str(pdf_dir)]) == 1


@patch("ingest_documents.DocumentStore")
@patch("ingest_documents.IngestionService")
def test_main_continues_after_unreadable_file(mock_service_class, mock_store_class, pdf_dir):
    service = mock_service_class.return_value
    service.ingest.return_value = Mock(chunks_created=1, document=Mock(document_id="node_2"))
    real_read_bytes = Path.read_bytes

    def read_bytes(path):
        if path.name == "a.PDF":
            raise PermissionError("permission denied")
        return real_read_bytes(path)

    with patch.object(Path, "read_bytes", read_bytes):
        exit_code = ingest_documents.main(["--user-id", "user_1", str(pdf_dir)])

    assert exit_code == 1
    service.ingest.assert_called_once_with("user_1", "b.pdf", b"%PDF-b")
