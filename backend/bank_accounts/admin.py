# bank_accounts/admin.py
from django.contrib import admin
from .models import BankAccount, BankAudit
from .search import BankAccountSearchRepository


@admin.register(BankAccount)
class BankAccountAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "bank_name", "balance", "currency", "masked_account", "created_at")
    list_filter = ("currency", "bank_name")
    search_fields = ("name", "masked_account", "bank_name", "iban_normalized")
    readonly_fields = ("masked_account", "iban_normalized", "created_at", "updated_at")
    exclude = ("iban_encrypted",)

    # admin writes go through the same index as the REST resource
    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        BankAccountSearchRepository().save(obj)

    def delete_model(self, request, obj):
        account_id = obj.pk
        super().delete_model(request, obj)
        BankAccountSearchRepository().delete(account_id)

    def delete_queryset(self, request, queryset):
        ids = list(queryset.values_list("id", flat=True))
        super().delete_queryset(request, queryset)
        repository = BankAccountSearchRepository()
        for account_id in ids:
            repository.delete(account_id)


@admin.register(BankAudit)
class BankAuditAdmin(admin.ModelAdmin):
    list_display = ("id", "action", "target_type", "target_id", "created_at")
    list_filter = ("action",)
    readonly_fields = ("detail", "created_at")
