from __future__ import annotations


class AssessmentError(Exception):
    """Base class for errors raised by the scoring engine."""


class DataLoadError(AssessmentError):
    """An answer-key dataset could not be loaded. Fatal to the grading call."""

    def __init__(self, test_type: str, message: str) -> None:
        self.test_type = test_type
        super().__init__(f"{test_type}: {message}")


class DataNotFoundError(DataLoadError):
    pass


class MalformedDataError(DataLoadError):
    pass


class UnknownTestTypeError(AssessmentError):
    def __init__(self, test_type: str) -> None:
        self.test_type = test_type
        super().__init__(f"Unknown test type: {test_type}")


class UnsupportedTestTypeError(AssessmentError):
    """The test type is in the catalog but has no scorer."""

    def __init__(self, test_type: str) -> None:
        self.test_type = test_type
        super().__init__(f"No scorer for test type: {test_type}")


class InvalidSubmissionError(AssessmentError):
    pass
