"""Package error classes.

All errors inherit from PydanticCustomError so they carry a machine-readable
type, a message template and a context dict that always includes the
package identifier.
"""

from __future__ import annotations

from typing import Any

from pydantic_core import PydanticCustomError

# Package identifier for error context
PACKAGE_NAME = "jp_address_utils"


class JapanAddressError(PydanticCustomError):
    """Base error for jp_address_utils.

    Can wrap:
    - PydanticCustomError: Preserves original error details
    - pydantic.ValidationError: Flattens the error list into one message
    """

    @classmethod
    def from_pydantic_error(cls, error: PydanticCustomError) -> JapanAddressError:
        """Wrap a PydanticCustomError, keeping type, message and context."""
        return cls(
            error.type,
            error.message_template,
            {"package": PACKAGE_NAME, **(error.context or {})},
        )

    @classmethod
    def from_validation_error(
        cls,
        error: Exception,
        error_type: str = "validation_error",
        context: dict[str, Any] | None = None,
    ) -> JapanAddressError:
        """Wrap a pydantic.ValidationError (or any exception).

        Args:
            error: The exception to wrap.
            error_type: Error type to report.
            context: Additional context to include in the error.

        Returns:
            Error instance of the calling class.
        """
        from pydantic import ValidationError

        ctx = {"package": PACKAGE_NAME, **(context or {})}

        if isinstance(error, ValidationError):
            details = error.errors()
            messages = []
            for detail in details[:5]:
                location = ".".join(str(part) for part in detail.get("loc", ()))
                message = detail.get("msg", "")
                messages.append(f"{location}: {message}" if location else message)
            if len(details) > 5:
                messages.append(f"... and {len(details) - 5} more")
            ctx["error_count"] = len(details)
            message = "; ".join(messages)
        else:
            message = str(error) or type(error).__name__

        # Braces in the message would be read as template placeholders
        ctx["reason"] = message
        return cls(error_type, "{reason}", ctx)


class IndexNotLoadedError(JapanAddressError):
    """Raised when an operation needs a ready dataset index.

    Querying before load() completed is a programming error; the caller is
    expected to load the dataset and retry.
    """

    @classmethod
    def for_state(cls, state: str) -> IndexNotLoadedError:
        """Build the error for an index in the given lifecycle state."""
        return cls(
            "index_not_loaded",
            "Dataset index is not ready (state: {state}); call load() first",
            {"package": PACKAGE_NAME, "state": state},
        )


class DatasetLoadError(JapanAddressError):
    """Raised when the backing dataset is missing, unreadable or malformed."""

    @classmethod
    def wrap(cls, error: Exception, **context: Any) -> DatasetLoadError:
        """Wrap an exception raised while reading or indexing the dataset."""
        if isinstance(error, DatasetLoadError):
            return error
        return cls.from_validation_error(error, "dataset_load", context)  # type: ignore[return-value]
