from __future__ import annotations

from collections.abc import Sequence

from httpx import Response


class SearchHelperError(Exception):
    """Generic class for search helper error handling."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"SearchHelperError. Error message: {self.message}."


class SearchResultsDecodeError(SearchHelperError):
    """Error when a search response is missing a mandatory field or is not a JSON object."""

    def __init__(self, message: str, fields: Sequence[str] | None = None) -> None:
        self.fields = list(fields) if fields else []
        super().__init__(message)

    def __str__(self) -> str:
        if self.fields:
            return f"SearchResultsDecodeError, {self.message} Fields: {', '.join(self.fields)}"

        return f"SearchResultsDecodeError, {self.message}"


class SearchApiError(SearchHelperError):
    """Error response returned by the search service."""

    def __init__(self, error: str, response: Response) -> None:
        self.status_code = response.status_code
        self.message = ""
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = None

            if isinstance(body, dict):
                self.message = f"Error message: {body.get('message') or ''}"
            else:
                self.message = error
        else:
            self.message = error
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"SearchApiError.{self.status_code} {self.message}"


class InvalidQueryParametersError(SearchHelperError):
    """Error when something other than QueryParameters is handed to the encoder."""

    def __str__(self) -> str:
        return f"InvalidQueryParametersError, {self.message}"
