from django.urls import path

from .views import (
    patient_search, patient_list, patient_create, patient_update,
    patient_delete, patient_restore, reminder_dates_preview,
    category_list, category_create, category_delete,
    drug_list, drug_create, drug_delete,
)

app_name = "patients"

urlpatterns = [
    # Patients
    path("", patient_list, name="list"),
    path("search/", patient_search, name="search"),
    path("create/", patient_create, name="create"),
    path("<uuid:patient_id>/edit/", patient_update, name="update"),
    path("<uuid:patient_id>/delete/", patient_delete, name="delete"),
    path("<uuid:patient_id>/restore/", patient_restore, name="restore"),

    # Calculator
    path("reminder-dates/", reminder_dates_preview, name="reminder-dates"),

    # Drug catalog
    path("categories/", category_list, name="category-list"),
    path("categories/create/", category_create, name="category-create"),
    path("categories/<int:category_id>/delete/", category_delete, name="category-delete"),
    path("drugs/", drug_list, name="drug-list"),
    path("drugs/create/", drug_create, name="drug-create"),
    path("drugs/<int:drug_id>/delete/", drug_delete, name="drug-delete"),
]
