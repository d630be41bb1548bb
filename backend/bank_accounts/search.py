# bank_accounts/search.py
"""
Search-index repository for BankAccount.

The index lives in the BankAccountDocument table and is queried with
PostgreSQL full-text search: every entry keeps the JSON representation served
to search clients, and a tsvector computed in the database from that JSON.

Queries use the web-search syntax of ``websearch_to_tsquery``: words are
AND-ed, ``or`` between words, ``-word`` excludes, ``"quoted text"`` is a
phrase. ``*`` alone matches every document. The ``simple`` configuration is
used, so words are lower-cased but never stemmed, and a balance such as
``120.50`` stays one lexeme. The IBAN is never indexed.
"""
import logging
from typing import Iterable, List, Optional

from django.contrib.postgres.search import SearchQuery, SearchVector
from django.db import transaction
from django.db.models.fields.json import KeyTextTransform
from django.utils import timezone

from .models import BankAccount, BankAccountDocument
from .serializers import BankAccountSerializer

logger = logging.getLogger(__name__)

SEARCH_CONFIG = "simple"
MATCH_ALL = "*"

# field -> weight in the search vector
INDEXED_FIELDS = {
    "name": "A",
    "bank_name": "B",
    "currency": "C",
    "balance": "C",
    "masked_account": "C",
}


def document_vector():
    """tsvector expression over the indexed fields of ``document``."""
    vector = None
    for field, weight in INDEXED_FIELDS.items():
        part = SearchVector(KeyTextTransform(field, "document"), weight=weight, config=SEARCH_CONFIG)
        vector = part if vector is None else vector + part
    return vector


def build_document(account: BankAccount) -> dict:
    return dict(BankAccountSerializer(account).data)


class BankAccountSearchRepository:
    """save / search / delete against the search index."""

    model = BankAccountDocument

    def _entry(self, account: BankAccount) -> BankAccountDocument:
        if account.pk is None:
            raise ValueError("Cannot index a BankAccount that has not been saved")
        return self.model(
            id=account.pk,
            document=build_document(account),
            indexed_at=timezone.now(),
        )

    def _refresh_vectors(self, ids) -> None:
        self.model.objects.filter(id__in=ids).update(search_vector=document_vector())

    @transaction.atomic
    def save(self, account: BankAccount) -> BankAccountDocument:
        entry = self._entry(account)
        entry.save()
        self._refresh_vectors([entry.id])
        logger.debug("Indexed BankAccount %s", account.pk)
        return entry

    @transaction.atomic
    def save_all(self, accounts: Iterable[BankAccount]) -> int:
        entries = [self._entry(a) for a in accounts]
        if not entries:
            return 0
        ids = [e.id for e in entries]
        self.model.objects.filter(id__in=ids).delete()
        self.model.objects.bulk_create(entries)
        self._refresh_vectors(ids)
        logger.debug("Indexed %d BankAccount documents", len(entries))
        return len(entries)

    def delete(self, account_id) -> None:
        deleted, _ = self.model.objects.filter(id=account_id).delete()
        if not deleted:
            logger.debug("BankAccount %s was not in the search index", account_id)

    def delete_all(self) -> int:
        deleted, _ = self.model.objects.all().delete()
        return deleted

    def find(self, account_id) -> Optional[dict]:
        entry = self.model.objects.filter(id=account_id).first()
        return entry.document if entry else None

    def search(self, query: str) -> List[dict]:
        """Return the stored documents matching ``query``, by id."""
        query = (query or "").strip()
        if not query:
            return []
        entries = self.model.objects.all()
        if query != MATCH_ALL:
            entries = entries.filter(
                search_vector=SearchQuery(query, search_type="websearch", config=SEARCH_CONFIG)
            )
        return [entry.document for entry in entries.order_by("id")]

    def count(self) -> int:
        return self.model.objects.count()
