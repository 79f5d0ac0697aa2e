# patients/views/patient_views.py

import logging
import re

from django.contrib.auth.decorators import login_required
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from patients.forms import PatientForm
from patients.models import Patient
from patients.services import InvalidDateError, compute_reminder_dates

from .payload import form_errors, read_payload

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10

PHONE_QUERY = re.compile(r"^\+?\d+$")


def _patient_queryset():
    return (
        Patient.objects
        .select_related("drug", "drug__category")
        .prefetch_related("reminder_dates")
    )


# ============================================================
# SEARCH
# ============================================================

@login_required
@require_GET
def patient_search(request):
    """
    Search rules:
    - two words       → firstname + lastname
    - contains "@"    → email
    - digits / +digits → phone number
    - anything else   → firstname, lastname or email
    """
    query = (request.GET.get("q") or "").strip()

    if not query:
        return JsonResponse(
            {"success": False, "error": "Search query is required."},
            status=400,
        )

    parts = query.split()
    qs = _patient_queryset().active()

    if len(parts) == 2:
        qs = qs.filter(
            firstname__icontains=parts[0],
            lastname__icontains=parts[1],
        )
    elif "@" in query:
        qs = qs.filter(email__icontains=query)
    elif PHONE_QUERY.match(query):
        qs = qs.filter(phone_number__icontains=query)
    else:
        qs = qs.filter(
            Q(firstname__icontains=query)
            | Q(lastname__icontains=query)
            | Q(email__icontains=query)
        )

    patients = [patient.to_dict() for patient in qs[:SEARCH_LIMIT]]

    return JsonResponse(patients, safe=False)


# ============================================================
# LIST (ACTIVE + TRASH BIN)
# ============================================================

@login_required
@require_GET
def patient_list(request):
    qs = _patient_queryset()

    return JsonResponse({
        "patients": [p.to_dict() for p in qs.active()],
        "trash_bin": [p.to_dict() for p in qs.trashed()],
    })


# ============================================================
# ONBOARDING / EDIT
# ============================================================

@login_required
@require_POST
def patient_create(request):
    data = read_payload(request)
    if data is None:
        return JsonResponse(
            {"success": False, "error": "Request body must be a JSON object."},
            status=400,
        )

    form = PatientForm(data)

    if not form.is_valid():
        return JsonResponse(
            {
                "success": False,
                "errors": form_errors(form),
                "error": "Please correct the errors below.",
            },
            status=400,
        )

    patient = form.save()
    logger.info("Patient %s onboarded by %s", patient.pk, request.user.username)

    return JsonResponse(
        {
            "success": True,
            "message": f"Patient '{patient.full_name}' added successfully!",
            "patient": patient.to_dict(),
        },
        status=201,
    )


@login_required
@require_POST
def patient_update(request, patient_id):
    patient = get_object_or_404(Patient.objects.active(), pk=patient_id)

    data = read_payload(request)
    if data is None:
        return JsonResponse(
            {"success": False, "error": "Request body must be a JSON object."},
            status=400,
        )

    form = PatientForm(data, instance=patient)

    if not form.is_valid():
        return JsonResponse(
            {
                "success": False,
                "errors": form_errors(form),
                "error": "Please correct the errors below.",
            },
            status=400,
        )

    patient = form.save()

    return JsonResponse({
        "success": True,
        "message": f"Patient '{patient.full_name}' updated successfully!",
        "patient": patient.to_dict(),
    })


# ============================================================
# SOFT DELETE / RESTORE
# ============================================================

@login_required
@require_POST
def patient_delete(request, patient_id):
    patient = get_object_or_404(Patient, pk=patient_id)
    patient.soft_delete()

    logger.info("Patient %s moved to trash by %s", patient.pk, request.user.username)

    return JsonResponse({
        "success": True,
        "message": "Patient moved to trash.",
    })


@login_required
@require_POST
def patient_restore(request, patient_id):
    patient = get_object_or_404(Patient, pk=patient_id)
    patient.restore()

    return JsonResponse({
        "success": True,
        "message": "Patient restored.",
        "patient": patient.to_dict(),
    })


# ============================================================
# REMINDER DATE PREVIEW
# ============================================================

@login_required
@require_GET
def reminder_dates_preview(request):
    next_dose_date = request.GET.get("next_dose_date", "")

    try:
        dates = compute_reminder_dates(next_dose_date)
    except InvalidDateError as exc:
        return JsonResponse({"success": False, "error": str(exc)}, status=400)

    return JsonResponse({
        "next_dose_date": dates[-1],
        "reminder_dates": dates,
    })
