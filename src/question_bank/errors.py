"""Exceptions raised by the extraction and generation pipeline.

Every failure is scoped to a single generation attempt: callers catch these,
log them and abort without persisting anything.
"""


class QuestionBankError(Exception):
    """Base class for all domain errors."""


# ---------------- PDF side ----------------

class PDFProcessingError(QuestionBankError, ValueError):
    """The PDF could not be opened or read."""


class InvalidPageRangeError(PDFProcessingError):
    """A page-range descriptor produced no usable pages."""


class InsufficientContentError(PDFProcessingError):
    """Too little text was extracted (usually a scanned, image-only PDF)."""

    def __init__(self, length: int, minimum: int):
        self.length = length
        self.minimum = minimum
        super().__init__(
            f"Extracted only {length} characters (minimum {minimum}); "
            "the PDF is probably a scanned image rather than text."
        )


# ---------------- LLM side ----------------

class LLMError(QuestionBankError, RuntimeError):
    """Base class for problems with the model's response."""


class LLMResponseFormatError(LLMError):
    """The response did not contain parseable JSON."""


class LLMRefusalError(LLMError):
    """The model explicitly refused to generate questions."""


class NoValidQuestionsError(LLMError):
    """The response parsed but no question passed validation."""
