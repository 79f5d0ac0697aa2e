import django.core.validators
import django.db.models.deletion
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="DrugCategory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150, unique=True)),
                ("description", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
                "verbose_name_plural": "drug categories",
            },
        ),
        migrations.CreateModel(
            name="Drug",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("category", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="drugs", to="patients.drugcategory")),
            ],
            options={
                "ordering": ["name"],
                "unique_together": {("name", "category")},
            },
        ),
        migrations.CreateModel(
            name="Patient",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("firstname", models.CharField(max_length=100)),
                ("lastname", models.CharField(max_length=100)),
                ("email", models.EmailField(db_index=True, max_length=254)),
                ("phone_number", models.CharField(blank=True, max_length=20)),
                ("purchase_date", models.DateField()),
                ("days_until_next_dose", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("next_dose_date", models.DateField(db_index=True, editable=False)),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("drug", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="patients", to="patients.drug")),
            ],
            options={
                "ordering": ["lastname", "firstname"],
            },
        ),
        migrations.CreateModel(
            name="PatientReminderDate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("reminder_date", models.DateField(db_index=True)),
                ("patient", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reminder_dates", to="patients.patient")),
            ],
            options={
                "ordering": ["reminder_date"],
                "unique_together": {("patient", "reminder_date")},
            },
        ),
    ]
