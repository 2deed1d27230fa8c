"""
Application error taxonomy and FastAPI exception handlers

Every user-facing failure is rendered as {"message": ...} (plus "errors" for
validation failures). Messages are in Turkish; stack traces never leave the
server.
"""

import logging
from contextlib import contextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Sunucu hatası"
VALIDATION_ERROR_MESSAGE = "Validasyon hatası"

# Messages for required fields missing from a request body
REQUIRED_FIELD_MESSAGES = {
    "storeName": "Mağaza adı zorunludur",
    "phone": "Telefon numarası zorunludur",
    "address": "Adres zorunludur",
    "city": "İl zorunludur",
    "district": "İlçe zorunludur",
    "routineName": "Rutin ismi zorunludur",
    "initialPoints": "Başlangıç puanı zorunludur",
    "name": "Ürün adı zorunludur",
    "price": "Ürün fiyatı zorunludur",
    "stock": "Stok miktarı zorunludur",
    "customerId": "Müşteri ID'si zorunludur",
    "visitDate": "Ziyaret tarihi zorunludur",
    "productIds": "Ürün listesi zorunludur",
    "customerIds": "Müşteri listesi zorunludur",
    "status": "Durum zorunludur",
}


class AppError(Exception):
    """Base class for errors that map onto an HTTP response"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"message": self.message}


class ValidationError(AppError):
    status_code = 400

    def __init__(self, errors: list[str], message: str = VALIDATION_ERROR_MESSAGE):
        super().__init__(message)
        self.errors = errors

    def to_body(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 400


class InvalidArgumentError(AppError):
    status_code = 400


class InternalError(AppError):
    status_code = 500


@contextmanager
def store_errors(db: Session, message: str = SERVER_ERROR_MESSAGE):
    """Roll back and re-raise store failures as InternalError"""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ Database error: {e}")
        raise InternalError(message) from e


def _field_name(loc: tuple) -> Optional[str]:
    # loc looks like ("body", "storeName") or ("query", "status")
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) if parts else None


def format_validation_errors(raw_errors) -> list[str]:
    """Turn pydantic error dicts into per-field messages"""
    messages = []
    for error in raw_errors:
        field = _field_name(tuple(error.get("loc", ())))
        if error.get("type") == "missing":
            messages.append(REQUIRED_FIELD_MESSAGES.get(field, f"{field} zorunludur"))
            continue
        msg = str(error.get("msg", ""))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(f"{field}: {msg}" if field and error.get("type") != "value_error" else msg)
    return messages


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
        error = ValidationError(format_validation_errors(exc.errors()))
        return JSONResponse(status_code=error.status_code, content=error.to_body())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"message": SERVER_ERROR_MESSAGE})
