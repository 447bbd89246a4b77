from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from storefront.utils.results import ErrorCode, ServiceResult

STATUS_BY_CODE = {
    ErrorCode.PRODUCT_NOT_FOUND: 404,
    ErrorCode.CART_NOT_FOUND: 404,
    ErrorCode.CART_ITEM_NOT_FOUND: 404,
    ErrorCode.DISCOUNT_NOT_FOUND: 404,
    ErrorCode.PRODUCT_OUT_OF_STOCK: 409,
    ErrorCode.DISCOUNT_ALREADY_USED: 409,
    ErrorCode.INVALID_QUANTITY: 400,
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.INVALID_DISCOUNT_CODE: 400,
    ErrorCode.CHECKOUT_FAILED: 402,
    ErrorCode.INTERNAL_ERROR: 500,
}


def _encode(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.to_json() if hasattr(data, "to_json") else data.model_dump(mode="json")
    if isinstance(data, (list, tuple)):
        return [_encode(d) for d in data]
    if isinstance(data, dict):
        return {k: _encode(v) for k, v in data.items()}
    return jsonable_encoder(data)


def success_response(data: Any, status_code: int = 200, message: Optional[str] = None) -> JSONResponse:
    body = {"success": True, "data": _encode(data)}
    if message:
        body["message"] = message
    return JSONResponse(body, status_code=status_code)


def error_response(code: ErrorCode, message: str, status_code: Optional[int] = None) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": {"code": code.value, "message": message}},
        status_code=status_code or STATUS_BY_CODE.get(code, 400),
    )


def from_result(result: ServiceResult, success_status: int = 200) -> JSONResponse:
    if result.success:
        return success_response(result.data, success_status)
    return error_response(result.error.code, result.error.message)
