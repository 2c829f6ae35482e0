"""Per-user document, chunk and message storage using Supabase PostgreSQL."""
import logging
import uuid
from typing import List, Optional
from supabase import create_client, Client

from config import SUPABASE_URL, SUPABASE_KEY
from exceptions import DocumentNotFoundError, InvalidArgumentError, StorageError
from models.chunk import Chunk
from models.conversation import ChatMessage
from models.document import Document

logger = logging.getLogger(__name__)

# PostgREST caps a single response; chunk reads are paged
PAGE_SIZE = 1000


class DocumentStore:
    """Stores documents (`nodes`), their chunks and chat messages per user."""

    def __init__(
        self,
        supabase_url: Optional[str] = SUPABASE_URL,
        supabase_key: Optional[str] = SUPABASE_KEY,
        client: Optional[Client] = None
    ):
        """
        Initialize the store with a Supabase client.

        Args:
            supabase_url: Supabase project URL
            supabase_key: Supabase API key
            client: Pre-built client, skips credential checks when given

        Raises:
            ValueError: If Supabase credentials are missing
        """
        if client is None:
            if not supabase_url or not supabase_key:
                raise ValueError("SUPABASE_URL and SUPABASE_KEY environment variables are required")
            client = create_client(supabase_url, supabase_key)

        self.client: Client = client
        logger.info("DocumentStore initialized with Supabase")

    # ---------- documents ----------

    def create_document(self, user_id: str, file_name: str, full_text: str) -> Document:
        """
        Insert a document record.

        Args:
            user_id: Owner of the document
            file_name: Uploaded file name
            full_text: Extracted text, may be empty

        Returns:
            The stored Document

        Raises:
            StorageError: If the insert fails
        """
        record = {
            "node_id": self._generate_id("node"),
            "user_id": user_id,
            "file_name": file_name,
            "full_content": full_text,
        }
        try:
            result = self.client.table("nodes").insert(record).execute()
        except Exception as e:
            raise self._storage_error(f"Failed to create document for user {user_id}", e)

        row = result.data[0] if result.data else record
        logger.info(f"Created document {record['node_id']} for user {user_id}")
        return Document.from_record(row)

    def get_document(self, user_id: str, document_id: str) -> Document:
        """
        Fetch one document owned by a user.

        Raises:
            DocumentNotFoundError: If the user has no such document
            StorageError: If the query fails
        """
        try:
            result = (
                self.client.table("nodes")
                .select("*")
                .eq("user_id", user_id)
                .eq("node_id", document_id)
                .execute()
            )
        except Exception as e:
            raise self._storage_error(f"Failed to read document {document_id}", e)

        if not result.data:
            raise DocumentNotFoundError(user_id, document_id)
        return Document.from_record(result.data[0])

    def list_documents(self, user_id: str) -> List[Document]:
        """List a user's documents, oldest first."""
        try:
            result = (
                self.client.table("nodes")
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=False)
                .execute()
            )
        except Exception as e:
            raise self._storage_error(f"Failed to list documents for user {user_id}", e)

        return [Document.from_record(row) for row in result.data or []]

    def update_summary(self, user_id: str, document_id: str, summary: str) -> None:
        """Store a generated summary on a document."""
        try:
            (
                self.client.table("nodes")
                .update({"summary": summary})
                .eq("user_id", user_id)
                .eq("node_id", document_id)
                .execute()
            )
        except Exception as e:
            raise self._storage_error(f"Failed to store summary for document {document_id}", e)

        logger.info(f"Stored summary for document {document_id}")

    def delete_document(self, user_id: str, document_id: str) -> None:
        """Remove a document record and any chunks stored for it."""
        try:
            (
                self.client.table("chunks")
                .delete()
                .eq("user_id", user_id)
                .eq("document_id", document_id)
                .execute()
            )
            (
                self.client.table("nodes")
                .delete()
                .eq("user_id", user_id)
                .eq("node_id", document_id)
                .execute()
            )
        except Exception as e:
            raise self._storage_error(f"Failed to delete document {document_id}", e)

        logger.info(f"Deleted document {document_id}")

    # ---------- chunks ----------

    def add_chunks(self, user_id: str, document_id: str, chunks: List[Chunk]) -> int:
        """
        Write all chunks of one document in a single insert request.

        PostgREST runs one request in one transaction, so either every
        chunk is stored or none is.

        Args:
            user_id: Owner of the document
            document_id: Document the chunks were split from
            chunks: Chunks in sequence order

        Returns:
            Number of chunks written

        Raises:
            StorageError: If the insert fails
        """
        if not chunks:
            logger.info(f"No chunks to store for document {document_id}")
            return 0

        records = []
        for chunk in chunks:
            record = chunk.to_record()
            record["document_id"] = document_id
            record["user_id"] = user_id
            records.append(record)

        try:
            self.client.table("chunks").insert(records).execute()
        except Exception as e:
            raise self._storage_error(f"Failed to store {len(records)} chunks for document {document_id}", e)

        logger.info(f"Stored {len(records)} chunks for document {document_id}")
        return len(records)

    def get_chunks(self, user_id: str) -> List[Chunk]:
        """
        Read every chunk across all of a user's documents.

        Rows are ordered by creation, then document, then sequence index.
        Malformed rows are skipped with a warning.

        Raises:
            StorageError: If the query fails
        """
        rows = []
        start = 0
        try:
            while True:
                result = (
                    self.client.table("chunks")
                    .select("text, idx, page, document_id, created_at")
                    .eq("user_id", user_id)
                    .order("created_at", desc=False)
                    .order("document_id", desc=False)
                    .order("idx", desc=False)
                    .range(start, start + PAGE_SIZE - 1)
                    .execute()
                )
                page = result.data or []
                rows.extend(page)
                if len(page) < PAGE_SIZE:
                    break
                start += PAGE_SIZE
        except Exception as e:
            raise self._storage_error(f"Failed to read chunks for user {user_id}", e)

        chunks = []
        for row in rows:
            try:
                chunks.append(Chunk.from_record(row))
            except InvalidArgumentError as e:
                logger.warning(f"Skipping malformed chunk of document {row.get('document_id')}: {e}")

        logger.debug(f"Loaded {len(chunks)} chunks for user {user_id}")
        return chunks

    # ---------- messages ----------

    def add_message(self, user_id: str, role: str, text: str) -> ChatMessage:
        """
        Append a chat message.

        Raises:
            StorageError: If the insert fails
        """
        record = {
            "message_id": self._generate_id("msg"),
            "user_id": user_id,
            "role": role,
            "text": text,
        }
        try:
            result = self.client.table("messages").insert(record).execute()
        except Exception as e:
            raise self._storage_error(f"Failed to store {role} message for user {user_id}", e)

        row = result.data[0] if result.data else record
        return ChatMessage.from_record(row)

    def list_messages(self, user_id: str, limit: Optional[int] = None) -> List[ChatMessage]:
        """
        List a user's chat messages in chronological order.

        Args:
            user_id: Owner of the chat
            limit: Keep only the most recent N messages
        """
        try:
            query = (
                self.client.table("messages")
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
            )
            if limit is not None:
                query = query.limit(limit)
            result = query.execute()
        except Exception as e:
            raise self._storage_error(f"Failed to list messages for user {user_id}", e)

        messages = [ChatMessage.from_record(row) for row in result.data or []]
        messages.reverse()
        return messages

    # ---------- helpers ----------

    def _generate_id(self, prefix: str) -> str:
        """Generate a unique record ID."""
        return f"{prefix}_{uuid.uuid4().hex[:12]}"

    def _storage_error(self, message: str, error: Exception) -> StorageError:
        """Log a Supabase failure and wrap it as a StorageError."""
        logger.error(f"{message}: {error}", exc_info=True)
        return StorageError(f"{message}: {error}")
