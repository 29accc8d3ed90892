import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SiteSettings",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("site_name", models.CharField(default="Site", max_length=100)),
                (
                    "admin_email",
                    models.EmailField(
                        blank=True,
                        default="",
                        help_text="Administrative contact address, used as a fallback for public addresses.",
                        max_length=254,
                    ),
                ),
            ],
            options={
                "verbose_name": "Site Settings",
                "verbose_name_plural": "Site Settings",
            },
        ),
        migrations.CreateModel(
            name="SiteOption",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        max_length=191,
                        unique=True,
                        validators=[
                            django.core.validators.RegexValidator(
                                message="Option names may contain lowercase letters, digits, '_', '.' and '-'.",
                                regex="^[a-z0-9_.\\-]+$",
                            )
                        ],
                    ),
                ),
                ("value", models.JSONField(blank=True, default=dict)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Site Option",
                "verbose_name_plural": "Site Options",
                "ordering": ["name"],
            },
        ),
    ]
