"""Exceptions shared across the summary pipeline."""

from __future__ import annotations

from enum import Enum


class ConfigurationError(RuntimeError):
    """Raised when environment settings are invalid."""


class ProductNotFound(LookupError):
    """Raised when a summary is requested for a product that does not exist."""

    def __init__(self, product_id):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class FailureKind(str, Enum):
    CONFIG_MISSING = "config_missing"
    PROVIDER_ERROR = "provider_error"
    BAD_GATEWAY = "bad_gateway"
    MALFORMED_RESPONSE = "malformed_response"


class LLMClientError(RuntimeError):
    """Base class for classified LLM failures. Always recovered by the local fallback."""

    kind: FailureKind = FailureKind.MALFORMED_RESPONSE

    def __init__(self, message: str = "", status_code: int | None = None):
        super().__init__(message or self.kind.value)
        self.status_code = status_code


class ConfigMissing(LLMClientError):
    kind = FailureKind.CONFIG_MISSING


class ProviderError(LLMClientError):
    kind = FailureKind.PROVIDER_ERROR

    def __init__(self, status_code: int, message: str = ""):
        super().__init__(message or f"provider returned HTTP {status_code}", status_code=status_code)


class BadGateway(LLMClientError):
    kind = FailureKind.BAD_GATEWAY


class MalformedResponse(LLMClientError):
    kind = FailureKind.MALFORMED_RESPONSE
