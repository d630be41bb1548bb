# bank_accounts/serializers.py
import re

from rest_framework import serializers
from .models import BankAccount, _normalize_iban

_IBAN_RE = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{11,30}$")


class BankAccountSerializer(serializers.ModelSerializer):
    """
    JSON representation of a BankAccount.

    `id` is writable so the REST handler can tell a create (no id) from an
    update (id present). `iban` is write-only; reads only expose `masked_account`.
    """
    id = serializers.IntegerField(required=False, allow_null=True)
    iban = serializers.CharField(write_only=True, required=False, allow_blank=True, allow_null=True)
    masked_account = serializers.CharField(read_only=True)

    class Meta:
        model = BankAccount
        fields = [
            "id", "name", "balance", "currency", "bank_name",
            "iban", "masked_account", "created_at", "updated_at",
        ]
        read_only_fields = ["masked_account", "created_at", "updated_at"]

    def validate_currency(self, value):
        value = (value or "").strip().upper()
        if value and not value.isalpha():
            raise serializers.ValidationError("Currency must be an alphabetic code.")
        return value or "EUR"

    def validate_iban(self, value):
        if not value:
            return value
        normalized = _normalize_iban(value)
        if not _IBAN_RE.match(normalized or ""):
            raise serializers.ValidationError("Enter a valid IBAN.")
        return value

    def create(self, validated_data):
        validated_data.pop("id", None)
        iban = validated_data.pop("iban", None)
        instance = BankAccount(**validated_data)
        if iban:
            instance.set_iban(iban)
        instance.save()
        return instance

    def update(self, instance, validated_data):
        validated_data.pop("id", None)
        # iban is write-only: leave the stored one alone unless the client sends the key
        has_iban = "iban" in validated_data
        iban = validated_data.pop("iban", None)
        for field, val in validated_data.items():
            setattr(instance, field, val)
        if has_iban:
            instance.set_iban(iban)
        instance.save()
        return instance

