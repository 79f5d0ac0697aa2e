# patients/views/__init__.py

"""
Patient and drug catalog JSON views.
"""

from .patient_views import (
    patient_search,
    patient_list,
    patient_create,
    patient_update,
    patient_delete,
    patient_restore,
    reminder_dates_preview,
)

from .drug_views import (
    category_list,
    category_create,
    category_delete,
    drug_list,
    drug_create,
    drug_delete,
)

__all__ = [
    # Patients
    "patient_search",
    "patient_list",
    "patient_create",
    "patient_update",
    "patient_delete",
    "patient_restore",
    "reminder_dates_preview",

    # Drug catalog
    "category_list",
    "category_create",
    "category_delete",
    "drug_list",
    "drug_create",
    "drug_delete",
]
