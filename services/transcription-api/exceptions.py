"""Custom exceptions for the transcription-api service."""


class MissingConfigurationError(Exception):
    """Raised at startup when a required environment variable is absent."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"Missing environment variable: {variable}")


class ChunkAppendError(Exception):
    """Raised when a chunk cannot be appended to the working recording."""

    def __init__(self, session_id: str, cause: Exception | None = None):
        self.session_id = session_id
        self.cause = cause
        super().__init__(f"Failed to append chunk to recording '{session_id}'")


class NoActiveRecordingError(Exception):
    """Raised when finalize is requested but no chunks were recorded."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__("No recording found to convert")


class MissingUserIdentifierError(Exception):
    """Raised when a request that persists a transcript has no user id."""

    def __init__(self):
        super().__init__("Missing user_id in request")


class UploadTooLargeError(Exception):
    """Raised when an uploaded audio file exceeds the configured limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Uploaded file is {size} bytes, limit is {limit} bytes")


class ConversionError(Exception):
    """Raised when converting a recording to MP3 fails."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to convert '{file_name}' to MP3")


class TranscriptionError(Exception):
    """Base class for speech-to-text failures."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class TranscriptionProviderError(TranscriptionError):
    """Raised when the provider reports an error for the request."""


class EmptyTranscriptionError(TranscriptionError):
    """Raised when the provider response carries no transcript."""

    def __init__(self, cause: Exception | None = None):
        super().__init__("No transcription text returned by provider", cause)


class TranscriptionPersistenceError(Exception):
    """Raised when reading or writing transcription records fails."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Transcription store {operation} failed")


class InvalidStateTransitionError(Exception):
    """Raised when the recording controller is driven out of order."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot transition from '{current}' to '{target}'")


class MissingUploadError(Exception):
    """Raised when a multipart request lacks its file field."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"No {field_name} file uploaded")
