"""JSON:API collection errors and error object templates."""

from typing import Any


class JSONAPIError(Exception):
    """Base class for errors raised while building JSON:API documents."""

    status: str = "500"
    title: str = "Internal Server Error"


class MalformedItemError(JSONAPIError, ValueError):
    """Raised when a normalized item is not a valid JSON:API fragment."""

    title = "Malformed Item"


class InvalidIriError(JSONAPIError, ValueError):
    """Raised when the request IRI cannot be parsed."""

    status = "400"
    title = "Invalid IRI"


class ResourceClassNotFoundError(JSONAPIError, LookupError):
    """Raised when no metadata or serializer is registered for a class."""

    title = "Resource Class Not Found"


class PropertyAccessError(JSONAPIError, AttributeError):
    """Raised when a property path cannot be read from an object."""

    title = "Property Not Readable"


class InvalidFilterError(JSONAPIError, ValueError):
    """Raised when a cursor filter cannot be applied to a query."""

    status = "400"
    title = "Invalid Filter"


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object."""
        error: dict[str, Any] = {}
        if status is not None:
            error["status"] = status
        if code is not None:
            error["code"] = code
        if title is not None:
            error["title"] = title
        if detail is not None:
            error["detail"] = detail
        if source is not None:
            error["source"] = source
        if meta is not None:
            error["meta"] = meta
        if not error:
            raise ValueError("Error object must include at least one field.")
        return error

    def from_exception(self, exc: Exception) -> dict[str, Any]:
        """Return the error object describing ``exc``.

        Errors outside the ``JSONAPIError`` hierarchy are reported as a
        generic 500 without leaking their message.
        """
        if isinstance(exc, JSONAPIError):
            return self.error_object(
                status=exc.status,
                code=type(exc).__name__,
                title=exc.title,
                detail=str(exc) or None,
            )
        return self.error_object(status="500", title="Internal Server Error")
