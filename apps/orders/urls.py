from django.urls import path
from .views import ItemsView, OffersView, OrdersCollectionView, RetrieveOrderView
from .views import ItemsManagementView, ItemDetailManagementView
from .views import OffersManagementView, OfferDetailManagementView
app_name = "orders"

urlpatterns = [
    path("items", ItemsView.as_view(), name="items"),
    path("offers", OffersView.as_view(), name="offers"),
    path("orders", OrdersCollectionView.as_view(), name="orders-collection"),  # GET list / POST create
    path("orders/<int:order_id>", RetrieveOrderView.as_view(), name="orders-detail"),
    path("items-management", ItemsManagementView.as_view(), name="items-management"),
    path("items-management/<int:item_id>", ItemDetailManagementView.as_view(), name="items-management-detail"),
    path("offers-management", OffersManagementView.as_view(), name="offers-management"),
    path("offers-management/<int:offer_id>", OfferDetailManagementView.as_view(), name="offers-management-detail"),
]
