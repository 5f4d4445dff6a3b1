from .admission_service import AdmissionResult, OrderAdmissionService
from .code_service import TRACKING_CODE_ALPHABET, generate_tracking_code
from .reconciliation_service import ProjectionReconciliationService, ReconciliationReport
from .status_service import OrderStatusService, StatusChange
from .tracking_service import OrderTrackingService

__all__ = [
    "AdmissionResult",
    "OrderAdmissionService",
    "TRACKING_CODE_ALPHABET",
    "generate_tracking_code",
    "ProjectionReconciliationService",
    "ReconciliationReport",
    "OrderStatusService",
    "StatusChange",
    "OrderTrackingService",
]
