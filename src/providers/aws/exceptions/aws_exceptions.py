"""AWS-specific exceptions."""

from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from domain.base.exceptions import ProviderError


class AWSInfrastructureError(ProviderError):
    """Raised when an AWS API call fails."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, details=details)


class AuthorizationError(AWSInfrastructureError):
    """Raised when AWS rejects the caller's credentials or permissions."""


class NetworkError(AWSInfrastructureError):
    """Raised when AWS cannot be reached or times out."""


class AWSConfigurationError(AWSInfrastructureError):
    """Raised when the AWS session cannot be created."""


_AUTHORIZATION_CODES = {
    "UnauthorizedOperation",
    "AccessDenied",
    "AccessDeniedException",
    "InvalidClientTokenId",
    "AuthFailure",
}
_NETWORK_CODES = {"RequestTimeout", "ServiceUnavailable", "Throttling", "RequestLimitExceeded"}


def convert_aws_error(error: Exception, operation_name: str) -> AWSInfrastructureError:
    """Convert a botocore error raised by ``operation_name`` to a provider exception."""
    if isinstance(error, ClientError):
        error_code = error.response.get("Error", {}).get("Code", "Unknown")
        error_message = error.response.get("Error", {}).get("Message", str(error))
        details = {"operation": operation_name, "error_code": error_code}
        message = f"{operation_name} failed: {error_code} - {error_message}"

        if error_code in _AUTHORIZATION_CODES:
            return AuthorizationError(message, details)
        if error_code in _NETWORK_CODES:
            return NetworkError(message, details)
        return AWSInfrastructureError(message, details)

    if isinstance(error, BotoCoreError):
        return NetworkError(f"{operation_name} failed: {error}", {"operation": operation_name})

    return AWSInfrastructureError(f"{operation_name} failed: {error}", {"operation": operation_name})
