# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import appointment_service
from . import dashboard_service
from . import directory_service
from . import patient_service
from . import role_service
from . import visit_service

__all__ = [
    "appointment_service",
    "dashboard_service",
    "directory_service",
    "patient_service",
    "role_service",
    "visit_service",
]
