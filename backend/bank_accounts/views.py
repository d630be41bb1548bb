# bank_accounts/views.py
import logging

from rest_framework import viewsets, permissions, status
from rest_framework.response import Response
from rest_framework.reverse import reverse
from django.shortcuts import get_object_or_404
from django.db import transaction

from . import headers
from .models import BankAccount
from .search import BankAccountSearchRepository
from .serializers import BankAccountSerializer

logger = logging.getLogger(__name__)

ENTITY_NAME = "bankAccount"


def _loggable(data):
    """Request body with the IBAN redacted."""
    if not hasattr(data, "items"):
        return data
    return {k: ("***" if k == "iban" and v else v) for k, v in data.items()}


class BankAccountViewSet(viewsets.GenericViewSet):
    """
    REST resource for BankAccount, mounted under /api:

    - POST   /bankAccounts                 -> create (refuses a body that already has an id)
    - PUT    /bankAccounts                 -> update (falls back to create without an id)
    - GET    /bankAccounts                 -> list, unpaginated
    - GET    /bankAccounts/{id}            -> retrieve
    - DELETE /bankAccounts/{id}            -> destroy, in the database and the search index
    - GET    /_search/bankAccounts/{query} -> full-text search of the index

    Every write goes to the database first, then to the search index, inside
    one transaction.
    """
    queryset = BankAccount.objects.all()
    serializer_class = BankAccountSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None
    lookup_url_kwarg = "id"
    filterset_fields = ["currency", "bank_name"]
    ordering_fields = ["id", "name", "balance", "currency", "created_at"]
    ordering = ["id"]

    search_repository_class = BankAccountSearchRepository

    def get_search_repository(self) -> BankAccountSearchRepository:
        return self.search_repository_class()

    def create(self, request, *args, **kwargs):
        logger.debug("REST request to save BankAccount : %s", _loggable(request.data))
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._create(serializer)

    def _create(self, serializer):
        if serializer.validated_data.get("id") is not None:
            return Response(
                status=status.HTTP_400_BAD_REQUEST,
                headers=headers.create_failure_alert(
                    ENTITY_NAME, "idexists", "A new bankAccount cannot already have an ID"
                ),
            )
        with transaction.atomic():
            result = serializer.save()
            self.get_search_repository().save(result)
        location = reverse("bank_accounts:bankaccount-detail", kwargs={"id": result.id})
        response_headers = {"Location": location}
        response_headers.update(headers.create_entity_creation_alert(ENTITY_NAME, str(result.id)))
        return Response(serializer.data, status=status.HTTP_201_CREATED, headers=response_headers)

    def update(self, request, *args, **kwargs):
        logger.debug("REST request to update BankAccount : %s", _loggable(request.data))
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        account_id = serializer.validated_data.get("id")
        if account_id is None:
            return self._create(serializer)

        instance = get_object_or_404(self.get_queryset(), pk=account_id)
        serializer = self.get_serializer(instance, data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            result = serializer.save()
            self.get_search_repository().save(result)
        return Response(
            serializer.data,
            status=status.HTTP_200_OK,
            headers=headers.create_entity_update_alert(ENTITY_NAME, str(result.id)),
        )

    def list(self, request, *args, **kwargs):
        logger.debug("REST request to get all BankAccounts")
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)

    def retrieve(self, request, *args, **kwargs):
        logger.debug("REST request to get BankAccount : %s", kwargs.get("id"))
        instance = self.get_object()
        serializer = self.get_serializer(instance)
        return Response(serializer.data)

    def destroy(self, request, *args, **kwargs):
        account_id = kwargs.get("id")
        logger.debug("REST request to delete BankAccount : %s", account_id)
        instance = self.get_object()
        with transaction.atomic():
            instance.delete()
            self.get_search_repository().delete(account_id)
        return Response(
            status=status.HTTP_200_OK,
            headers=headers.create_entity_deletion_alert(ENTITY_NAME, str(account_id)),
        )

    def search(self, request, query=None, *args, **kwargs):
        logger.debug("REST request to search BankAccounts for query %s", query)
        return Response(self.get_search_repository().search(query))
