import bank_accounts.fields
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="BankAccount",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                ("balance", models.DecimalField(decimal_places=2, max_digits=18)),
                ("currency", models.CharField(blank=True, default="EUR", max_length=8)),
                ("bank_name", models.CharField(blank=True, max_length=120)),
                ("iban_encrypted", bank_accounts.fields.EncryptedTextField(blank=True, null=True)),
                ("iban_normalized", models.CharField(blank=True, db_index=True, max_length=64, null=True)),
                ("masked_account", models.CharField(blank=True, default="", max_length=64)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "bank_account",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="BankAccountDocument",
            fields=[
                ("id", models.BigIntegerField(primary_key=True, serialize=False)),
                ("document", models.JSONField(default=dict)),
                ("content", models.TextField(blank=True, default="")),
                ("indexed_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "bank_account_search_index",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="BankAudit",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action", models.CharField(max_length=128)),
                ("target_type", models.CharField(blank=True, max_length=64, null=True)),
                ("target_id", models.CharField(blank=True, max_length=64, null=True)),
                ("detail", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
            ],
            options={
                "db_table": "bank_account_audit",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["action"], name="bank_audit_action_idx"),
                    models.Index(fields=["target_type", "target_id"], name="bank_audit_target_idx"),
                    models.Index(fields=["created_at"], name="bank_audit_created_idx"),
                ],
            },
        ),
    ]
