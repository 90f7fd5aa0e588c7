"""
Custom exceptions for relic data extraction and rendering.

Only failures that abort a run are exceptions. Missing tables and
unparseable markdown lines are logged as warnings and skipped.
"""


class RelicDataError(Exception):
    pass


class FetchError(RelicDataError):
    pass


class ExtractionError(RelicDataError):
    pass


class DataFileError(RelicDataError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")
