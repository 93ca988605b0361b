"""Media domain exceptions."""

from app.core.exceptions import DependencyError, NotFoundError, ValidationError


class MediaNotFoundError(NotFoundError):
    error_type = "media_not_found"

    def __init__(self, message: str = "Media file not found"):
        super().__init__(message)


class NoFilesUploadedError(ValidationError):
    error_type = "no_files"

    def __init__(self, message: str = "No files uploaded"):
        super().__init__(message)


class TooManyFilesError(ValidationError):
    error_type = "too_many_files"

    def __init__(self, limit: int):
        super().__init__(f"Too many files. Maximum is {limit} files per upload")


class FileTooLargeError(ValidationError):
    error_type = "file_too_large"

    def __init__(self, filename: str, limit_mb: int):
        super().__init__(f"File '{filename}' exceeds the {limit_mb}MB limit")


class StorageError(DependencyError):
    """Raised when the storage provider fails to store or remove a file."""

    error_type = "storage_error"

    def __init__(self, message: str = "Media storage failed"):
        super().__init__(message)


class UnsupportedFileTypeError(ValidationError):
    error_type = "unsupported_file_type"

    def __init__(self, filename: str):
        super().__init__(f"File '{filename}' is not a supported media format")
