from .appointment_controller import appointment_bp
from .dashboard_controller import dashboard_bp
from .directory_controller import directory_bp
from .health_controller import health_bp
from .patient_controller import patient_bp
from .visit_controller import visit_bp

__all__ = [
    "appointment_bp",
    "dashboard_bp",
    "directory_bp",
    "health_bp",
    "patient_bp",
    "visit_bp",
]
