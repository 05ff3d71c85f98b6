"""HTTP views for the orders app.

Views are kept intentionally small: they validate requests (via Pydantic),
map to domain objects, delegate to the ``OrderEngine`` returned by
``get_order_engine()`` and turn the outcome into a response. Domain errors
become ``{"detail": CODE, "message": text}`` bodies; anything unexpected is
left to the gateway exception handler, which answers 500.
"""

import logging

from django.core.paginator import Paginator
from pydantic import ValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from . import providers
from .domain import DomainError
from .schemas import CreateOrderDTO, ItemDTO, OfferDTO, OrderReadDTO

logger = logging.getLogger("orders")


def _error(exc: DomainError, status_code: int) -> Response:
    return Response({"detail": exc.code, "message": str(exc)}, status=status_code)


def _invalid(code: str, exc: ValidationError) -> Response:
    logger.warning("%s: %s", code, exc.errors(include_url=False, include_context=False))
    return Response(
        {"detail": code, "message": str(exc)},
        status=status.HTTP_400_BAD_REQUEST,
    )


class ItemsView(APIView):
    """Browse the catalog."""

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "catalog_read"

    def get(self, request):
        items = providers.get_order_engine().list_items()
        return Response([ItemDTO.from_domain(i).model_dump() for i in items])


class OffersView(APIView):
    """Browse the offer book."""

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "catalog_read"

    def get(self, request):
        offers = providers.get_order_engine().list_offers()
        return Response([OfferDTO.from_domain(o).model_dump(by_alias=True) for o in offers])


class OrdersCollectionView(APIView):
    """Place an order or list placed orders.

    POST validates the payload with ``CreateOrderDTO`` and hands the lines to
    ``OrderEngine.place_order``. Every engine rejection (invalid lines,
    unknown item, insufficient stock) answers 400.
    """

    throttle_classes = [ScopedRateThrottle]

    def get_throttles(self):
        # DRF evaluates throttles in initial(), before get/post
        self.throttle_scope = "orders_list" if self.request.method == "GET" else "orders_create"
        return [throttle() for throttle in self.throttle_classes]

    def get(self, request):
        """List orders, newest first, paginated with ``page``/``page_size``."""
        try:
            page = int(request.GET.get("page", 1))
            page_size = int(request.GET.get("page_size", 20))
            if page_size <= 0:
                raise ValueError(page_size)
        except ValueError:
            return Response({"detail": "INVALID_PAGINATION"}, status=status.HTTP_400_BAD_REQUEST)

        orders = list(reversed(providers.get_order_engine().list_orders()))
        p = Paginator(orders, page_size)
        page_obj = p.get_page(page)

        return Response(
            {
                "count": p.count,
                "page": page_obj.number,
                "page_size": page_size,
                "results": [OrderReadDTO.from_domain(o).model_dump(by_alias=True) for o in page_obj.object_list],
            },
            status=status.HTTP_200_OK,
        )

    def post(self, request):
        """Place a new order.

        Returns:
            Response: 201 with the order, or 400 with
            ``INVALID_ORDER`` / ``INVALID_INPUT`` / ``ITEM_NOT_FOUND`` /
            ``INSUFFICIENT_STOCK``.
        """
        try:
            dto = CreateOrderDTO.model_validate(request.data)
        except ValidationError as e:
            return _invalid("INVALID_ORDER", e)

        try:
            order = providers.get_order_engine().place_order(dto.to_domain())
        except DomainError as e:
            return _error(e, status.HTTP_400_BAD_REQUEST)

        return Response(OrderReadDTO.from_domain(order).model_dump(by_alias=True), status=status.HTTP_201_CREATED)


class RetrieveOrderView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "orders_list"

    def get(self, request, order_id: int):
        try:
            order = providers.get_order_engine().get_order(order_id)
        except DomainError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        return Response(OrderReadDTO.from_domain(order).model_dump(by_alias=True), status=status.HTTP_200_OK)


class ItemsManagementView(APIView):
    """Create or update catalog items (200 on update, 201 on create)."""

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "management"

    def post(self, request):
        try:
            dto = ItemDTO.model_validate(request.data)
        except ValidationError as e:
            return _invalid("INVALID_ITEM", e)

        item, created = providers.get_order_engine().upsert_item(dto.name, dto.price, dto.stock, item_id=dto.id)
        code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
        return Response(ItemDTO.from_domain(item).model_dump(), status=code)


class ItemDetailManagementView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "management"

    def delete(self, request, item_id: int):
        try:
            providers.get_order_engine().remove_item(item_id)
        except DomainError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class OffersManagementView(APIView):
    """Create or update offers (200 on update, 201 on create)."""

    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "management"

    def post(self, request):
        try:
            dto = OfferDTO.model_validate(request.data)
        except ValidationError as e:
            return _invalid("INVALID_OFFER", e)

        offer, created = providers.get_order_engine().upsert_offer(
            dto.name, dto.condition_to_domain(), dto.discount, offer_id=dto.id
        )
        code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
        return Response(OfferDTO.from_domain(offer).model_dump(by_alias=True), status=code)


class OfferDetailManagementView(APIView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "management"

    def delete(self, request, offer_id: int):
        try:
            providers.get_order_engine().remove_offer(offer_id)
        except DomainError as e:
            return _error(e, status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
