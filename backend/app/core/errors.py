"""Error taxonomy for the upload/analysis pipeline.

Every error carries a short ``error`` label and a human-readable ``message``;
the upload route turns them into ``{"error": ..., "message": ...}`` bodies.
"""


class AnalysisError(Exception):
    """Base class for pipeline failures reported back to the uploader"""

    error = "Analysis error"
    status_code = 400
    default_message = "The uploaded file could not be analyzed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}


class NoFileUploaded(AnalysisError):
    error = "No file uploaded"
    default_message = "Please select a file to upload"


class InvalidFileType(AnalysisError):
    error = "Invalid file type"
    default_message = "Invalid file type. Allowed types: .csv, .fit, .gpx"


class FileTooLarge(AnalysisError):
    error = "File too large"
    default_message = "File size exceeds 10MB limit"


class ParseError(AnalysisError):
    error = "File parsing error"
    default_message = "Failed to parse file. Please check file format."


class NoValidDataError(AnalysisError):
    error = "No valid data"
    default_message = "No valid heart rate or RR interval data found in file."


class InsufficientDataError(AnalysisError):
    error = "Insufficient data"
    default_message = (
        "File does not contain enough RR intervals or heart rate data for HRV "
        "calculation. Need at least 2 data points."
    )


class UnexpectedServerError(AnalysisError):
    error = "Server error"
    status_code = 500
    default_message = "An unexpected error occurred while processing the file"
