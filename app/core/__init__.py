"""
Core Application - Infrastructure & Base Classes

Generic, reusable base classes shared by the domain apps. No business
logic lives here.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - SoftDeleteMixin: Soft delete support (is_deleted, deleted_at)

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling
    - ErrorCode / ERROR_STATUS: Failure taxonomy and HTTP status mapping

Views (import from core.views):
    - health_check: Database and cache liveness probe

Note:
    Django models and model mixins are NOT imported here to avoid
    AppRegistryNotReady errors. Import them directly from their modules.
"""

# Services (no Django model dependencies)
from .services import ERROR_STATUS, BaseService, ErrorCode, ServiceResult

__all__ = [
    "BaseService",
    "ServiceResult",
    "ErrorCode",
    "ERROR_STATUS",
]
