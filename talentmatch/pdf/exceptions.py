class PdfExtractionError(Exception):
    """Raised when a PDF layout reader cannot parse the document."""
