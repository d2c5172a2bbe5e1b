from talentmatch.extraction.exceptions import MalformedInputError
from talentmatch.extraction.models import SignatureCheckResult

PDF_SIGNATURE = "%PDF-"
HEADER_LENGTH = 8


class PdfSignatureValidator:
    """Cheap header check run before any extraction strategy."""

    def validate(self, data: bytes) -> SignatureCheckResult:
        """Check the PDF signature. Never raises."""
        header_sample = bytes(data[:HEADER_LENGTH]).decode("ascii", errors="replace")
        valid = len(data) >= HEADER_LENGTH and header_sample.startswith(PDF_SIGNATURE)
        return SignatureCheckResult(valid=valid, header_sample=header_sample)

    def ensure_valid(self, data: bytes) -> SignatureCheckResult:
        """Validate and raise on a non-PDF signature.

        Raises:
            MalformedInputError: carrying the decoded header sample.
        """
        result = self.validate(data)
        if not result.valid:
            raise MalformedInputError(result.header_sample)
        return result
