import enum
import functools
import inspect
import logging
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorCode(str, enum.Enum):
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    PRODUCT_OUT_OF_STOCK = "PRODUCT_OUT_OF_STOCK"  # reserved, no stock policy yet
    CART_NOT_FOUND = "CART_NOT_FOUND"
    CART_ITEM_NOT_FOUND = "CART_ITEM_NOT_FOUND"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_REQUEST = "INVALID_REQUEST"
    CHECKOUT_FAILED = "CHECKOUT_FAILED"
    DISCOUNT_NOT_FOUND = "DISCOUNT_NOT_FOUND"
    DISCOUNT_ALREADY_USED = "DISCOUNT_ALREADY_USED"
    INVALID_DISCOUNT_CODE = "INVALID_DISCOUNT_CODE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ShopError(Exception):
    """Expected business failure raised inside services.

    Public service operations never let it escape: ``service_operation``
    turns it into a failed ``ServiceResult``.
    """

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(frozen=True)
class ServiceError:
    code: ErrorCode
    message: str

    def to_dict(self) -> dict:
        return {"code": self.code.value, "message": self.message}


@dataclass
class ServiceResult(Generic[T]):
    data: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "ServiceResult[T]":
        return cls(data=data)

    @classmethod
    def fail(cls, code: ErrorCode, message: str) -> "ServiceResult[T]":
        return cls(error=ServiceError(code=code, message=message))

    def unwrap(self) -> T:
        """Return the data or re-raise the failure as a ShopError."""
        if self.error is not None:
            raise ShopError(self.error.code, self.error.message)
        return self.data


def service_operation(failure_message: str):
    """
    Wrap a public service method so it always returns a ServiceResult.

    ShopError becomes a failed result carrying its own code; any other
    exception is logged and reported as INTERNAL_ERROR with failure_message,
    so internal details never reach callers. Works for sync and async methods.
    """

    def decorator(func):
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                try:
                    return ServiceResult.ok(await func(*args, **kwargs))
                except ShopError as e:
                    return ServiceResult.fail(e.code, e.message)
                except Exception:
                    log.exception("%s failed unexpectedly", func.__qualname__)
                    return ServiceResult.fail(ErrorCode.INTERNAL_ERROR, failure_message)

            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return ServiceResult.ok(func(*args, **kwargs))
            except ShopError as e:
                return ServiceResult.fail(e.code, e.message)
            except Exception:
                log.exception("%s failed unexpectedly", func.__qualname__)
                return ServiceResult.fail(ErrorCode.INTERNAL_ERROR, failure_message)

        return wrapper

    return decorator
