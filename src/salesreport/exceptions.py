"""Custom exceptions for sales analysis errors."""

from typing import Any, Dict, Optional


class AnalysisError(Exception):
    """Error that maps to a stable error payload."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: int = 422,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_payload(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class InvalidInputError(AnalysisError):
    """Dataset is missing a collection, has the wrong shape, or is empty."""

    def __init__(
        self, message: str, *, details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__("invalid_input", message, status_code=422, details=details)


class InvalidOptionsError(AnalysisError):
    """Revenue or bonus calculator is not callable."""

    def __init__(
        self, message: str, *, details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(
            "invalid_options", message, status_code=422, details=details
        )


class UnknownSellerError(AnalysisError, LookupError):
    """Purchase record references a seller id missing from the dataset."""

    def __init__(self, seller_id: str) -> None:
        super().__init__(
            "unknown_seller",
            f"Purchase record references unknown seller '{seller_id}'",
            status_code=404,
            details={"seller_id": seller_id},
        )
        self.seller_id = seller_id


class UnknownProductError(AnalysisError, LookupError):
    """Line item references a SKU missing from the product catalogue."""

    def __init__(self, sku: str) -> None:
        super().__init__(
            "unknown_product",
            f"Line item references unknown product '{sku}'",
            status_code=404,
            details={"sku": sku},
        )
        self.sku = sku
