# patients/views/drug_views.py

from django.contrib.auth.decorators import login_required
from django.db.models import Count, ProtectedError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from patients.forms import DrugCategoryForm, DrugForm
from patients.models import Drug, DrugCategory

from .payload import form_errors, read_payload


def _invalid(form):
    return JsonResponse(
        {
            "success": False,
            "errors": form_errors(form),
            "error": "Please correct the errors below.",
        },
        status=400,
    )


def _bad_payload():
    return JsonResponse(
        {"success": False, "error": "Request body must be a JSON object."},
        status=400,
    )


# ============================================================
# CATEGORIES
# ============================================================

@login_required
@require_GET
def category_list(request):
    data = (
        DrugCategory.objects
        .annotate(drug_count=Count("drugs"))
        .values("id", "name", "description", "drug_count")
    )
    return JsonResponse(list(data), safe=False)


@login_required
@require_POST
def category_create(request):
    data = read_payload(request)
    if data is None:
        return _bad_payload()

    form = DrugCategoryForm(data)
    if not form.is_valid():
        return _invalid(form)

    category = form.save()

    return JsonResponse(
        {
            "success": True,
            "category": {"id": category.id, "name": category.name},
        },
        status=201,
    )


@login_required
@require_POST
def category_delete(request, category_id):
    category = get_object_or_404(DrugCategory, id=category_id)

    try:
        category.delete()
    except ProtectedError:
        return JsonResponse(
            {
                "success": False,
                "error": f"Category '{category.name}' still has drugs assigned.",
            },
            status=409,
        )

    return JsonResponse({"success": True})


# ============================================================
# DRUGS
# ============================================================

@login_required
@require_GET
def drug_list(request):
    qs = Drug.objects.select_related("category")

    category_id = request.GET.get("category")
    if category_id:
        qs = qs.filter(category_id=category_id)

    return JsonResponse(
        list(qs.values("id", "name", "category_id", "category__name")),
        safe=False,
    )


@login_required
@require_POST
def drug_create(request):
    data = read_payload(request)
    if data is None:
        return _bad_payload()

    form = DrugForm(data)
    if not form.is_valid():
        return _invalid(form)

    drug = form.save()

    return JsonResponse(
        {
            "success": True,
            "drug": {
                "id": drug.id,
                "name": drug.name,
                "category_id": drug.category_id,
            },
        },
        status=201,
    )


@login_required
@require_POST
def drug_delete(request, drug_id):
    drug = get_object_or_404(Drug, id=drug_id)

    try:
        drug.delete()
    except ProtectedError:
        return JsonResponse(
            {
                "success": False,
                "error": f"Drug '{drug.name}' is still prescribed to patients.",
            },
            status=409,
        )

    return JsonResponse({"success": True})
