# bank_accounts/management/commands/rotate_fernet_keys.py
import logging
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.conf import settings

from bank_accounts import fields
from bank_accounts.models import BankAccount

logger = logging.getLogger(__name__)

MAX_ERRORS = 20


class Command(BaseCommand):
    help = "Re-encrypt stored IBANs with the primary FERNET_KEYS entry. Dry-run by default; use --commit to persist."

    def add_arguments(self, parser):
        parser.add_argument("--commit", action="store_true", help="Perform re-encryption; default is dry-run")
        parser.add_argument("--batch-size", type=int, default=200, help="Batch size for processing")
        parser.add_argument("--preview-limit", type=int, default=20, help="Preview N rows in dry-run")

    def handle(self, *args, **options):
        keys = getattr(settings, "FERNET_KEYS", None)
        if not keys or not isinstance(keys, (list, tuple)) or not keys[0]:
            raise CommandError("FERNET_KEYS not configured or invalid in settings")
        fields.reset_key_cache()

        commit = options["commit"]
        batch_size = options["batch_size"]

        self.stdout.write(f"FERNET_KEYS count={len(keys)}; the first key encrypts. commit={commit}")

        qs = BankAccount.objects.exclude(iban_encrypted__isnull=True).order_by("id")
        total = qs.count()
        self.stdout.write(f"Found {total} BankAccount rows with an IBAN")

        if not commit:
            for acct in qs[:options["preview_limit"]]:
                # reading the field decrypts with any configured key
                self.stdout.write(f"[DRY] id={acct.id} iban_present={bool(acct.iban_encrypted)}")
            self.stdout.write("Dry-run complete. To perform rotation run with --commit")
            return

        processed = 0
        errors = 0
        for start in range(0, total, batch_size):
            batch = list(qs[start:start + batch_size])
            with transaction.atomic():
                for acct in batch:
                    try:
                        # saving re-encrypts the decrypted value with the primary key
                        acct.save(update_fields=["iban_encrypted"])
                        processed += 1
                    except Exception:
                        errors += 1
                        logger.exception("Error re-encrypting BankAccount id=%s", acct.id)
                        if errors > MAX_ERRORS:
                            raise CommandError(f"Rotation aborted after {errors} errors")
        self.stdout.write(f"Rotation done: processed={processed} errors={errors}")
