"""Supplier API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.suppliers.dtos import CreateSupplierDTO, UpdateSupplierDTO
from modules.suppliers.exceptions import (
    SupplierAlreadyExists,
    SupplierInUse,
    SupplierNotFound,
)
from modules.suppliers.filters import SupplierFilter
from modules.suppliers.models import Supplier
from modules.suppliers.repositories.django_repository import SupplierDjangoRepository
from modules.suppliers.serializers import SupplierSerializer
from modules.suppliers.services import SupplierService


class SupplierViewSet(ListModelMixin, GenericViewSet):
    filterset_class = SupplierFilter
    ordering_fields = ["id", "name"]
    ordering = ["id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    queryset = Supplier.objects.all()
    serializer_class = SupplierSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = SupplierService(repository=SupplierDjangoRepository())

    def get_queryset(self):
        return self._service.list_suppliers()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/suppliers/{pk}/"""
        try:
            supplier = self._service.get_supplier(pk)
        except SupplierNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(SupplierSerializer(supplier).data)

    @action(detail=False, methods=["get"], url_path=r"name/(?P<name>[^/]+)")
    def by_name(self, request: Request, name: str | None = None) -> Response:
        """GET /api/v1/suppliers/name/{name}/"""
        try:
            supplier = self._service.get_supplier_by_name(name or "")
        except SupplierNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(SupplierSerializer(supplier).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/suppliers/"""
        try:
            dto = CreateSupplierDTO(
                name=request.data.get("name", ""),
                description=request.data.get("description", ""),
            )
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            supplier = self._service.create_supplier(dto)
        except SupplierAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(
            SupplierSerializer(supplier).data, status=status.HTTP_201_CREATED
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/suppliers/{pk}/"""
        try:
            dto = UpdateSupplierDTO(
                name=request.data.get("name"),
                description=request.data.get("description"),
            )
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            supplier = self._service.update_supplier(pk, dto)
        except SupplierNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except SupplierAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(SupplierSerializer(supplier).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/suppliers/{pk}/"""
        try:
            self._service.delete_supplier(pk)
        except SupplierNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except SupplierInUse as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        return Response(status=status.HTTP_204_NO_CONTENT)
