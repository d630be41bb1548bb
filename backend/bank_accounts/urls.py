# bank_accounts/urls.py
from django.urls import path
from .views import BankAccountViewSet

bankaccount_list = BankAccountViewSet.as_view({"get": "list", "post": "create", "put": "update"})
bankaccount_detail = BankAccountViewSet.as_view({"get": "retrieve", "delete": "destroy"})
bankaccount_search = BankAccountViewSet.as_view({"get": "search"})

urlpatterns = [
    path("bankAccounts", bankaccount_list, name="bankaccount-list"),
    path("bankAccounts/<int:id>", bankaccount_detail, name="bankaccount-detail"),
    path("_search/bankAccounts/<path:query>", bankaccount_search, name="bankaccount-search"),
]
