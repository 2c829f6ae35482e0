"""Exception hierarchy for Cognistore."""


class CognistoreError(Exception):
    """Base exception for Cognistore errors."""
    pass


class InvalidArgumentError(CognistoreError, ValueError):
    """Raised for malformed configuration or malformed chunk records."""
    pass


class ExtractionError(CognistoreError):
    """Raised when text extraction from an uploaded PDF fails."""
    pass


class StorageError(CognistoreError):
    """Raised when reading from or writing to the document store fails."""
    pass


class DocumentNotFoundError(CognistoreError):
    """Raised when a document does not exist for the requesting user."""

    def __init__(self, user_id: str, document_id: str):
        self.user_id = user_id
        self.document_id = document_id
        super().__init__(f"Document {document_id} not found for user {user_id}")
