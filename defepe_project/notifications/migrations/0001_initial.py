import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("category", models.CharField(choices=[("reminder", "Reminder"), ("system", "System")], db_index=True, default="system", max_length=20)),
                ("priority", models.CharField(choices=[("info", "Info"), ("warning", "Warning"), ("danger", "Danger")], db_index=True, default="info", max_length=20)),
                ("title", models.CharField(help_text="Headline shown in the dashboard feed", max_length=200)),
                ("message", models.TextField(help_text="Full text shown when the item is opened")),
                ("is_read", models.BooleanField(db_index=True, default=False)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("recipient", models.ForeignKey(help_text="Staff member who sees this item", on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
                    models.Index(fields=["recipient", "category", "is_read"], name="notif_recipient_cat_read_idx"),
                ],
            },
        ),
    ]
