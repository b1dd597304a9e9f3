"""
Router error handling utilities.

Decorator translating domain exceptions into HTTPExceptions with
consistent logging across the embedding and retrieval endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from draftmind.core.exceptions import (
    ConfigurationError,
    DraftmindException,
    NotFoundError,
    ProviderError,
    ValidationError,
)
from draftmind.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_errors(func: F) -> F:
    """
    Decorator to map domain errors to HTTP status codes.

    - ValidationError -> 400
    - NotFoundError -> 404
    - ProviderError -> 502
    - ConfigurationError and anything unexpected -> 500
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except NotFoundError as e:
            logger.warning("Resource not found", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except ProviderError as e:
            logger.warning("Embedding provider failure", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

        except ConfigurationError as e:
            logger.error("Service misconfigured", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.message,
            )

        except DraftmindException as e:
            log_exception_with_context(logger, "Operation failed", e, endpoint=func.__name__)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.message,
            )

        except Exception as e:
            log_exception_with_context(logger, "Unexpected failure", e, endpoint=func.__name__)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
