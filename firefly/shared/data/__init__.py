"""
Static reference data shipped with the application.
"""

from firefly.shared.data.healthcare_tags import (
    HEALTHCARE_CATEGORIES,
    HealthcareCategory,
    expand_healthcare_categories,
)

__all__ = [
    "HEALTHCARE_CATEGORIES",
    "HealthcareCategory",
    "expand_healthcare_categories",
]
