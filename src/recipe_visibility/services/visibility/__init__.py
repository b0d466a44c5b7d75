"""Visibility propagation across related recipes."""

from recipe_visibility.services.visibility.exceptions import (
    InvalidVisibilityRequestError,
    InvalidWriteCredentialsError,
    ProjectMismatchError,
    VisibilityError,
    WriteChainExhaustedError,
    WriteCredentialsMissingError,
    WritePermissionError,
)
from recipe_visibility.services.visibility.models import (
    PropagationResult,
    VisibilityChangeRequest,
)
from recipe_visibility.services.visibility.service import VisibilityService
from recipe_visibility.services.visibility.write_chain import WriteChain


__all__ = [
    "InvalidVisibilityRequestError",
    "InvalidWriteCredentialsError",
    "ProjectMismatchError",
    "PropagationResult",
    "VisibilityChangeRequest",
    "VisibilityError",
    "VisibilityService",
    "WriteChain",
    "WriteChainExhaustedError",
    "WriteCredentialsMissingError",
    "WritePermissionError",
]
