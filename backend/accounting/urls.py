from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(
    r"stores/(?P<store_id>\d+)/daily-sales", views.DailySalesViewSet, basename="daily-sales"
)

urlpatterns = [
    path("", include(router.urls)),
]

# URL patterns reference:
#
# GET  /stores/{store_id}/daily-sales/?start_date=2024-01-01&end_date=2024-01-31
# GET  /stores/{store_id}/daily-sales/?date=2024-01-15
# GET  /stores/{store_id}/daily-sales/{YYYY-MM-DD}/
# POST /stores/{store_id}/daily-sales/calculate/
# POST /stores/{store_id}/daily-sales/finalize/
# GET  /stores/{store_id}/daily-sales/summary/?start_date=...&end_date=...&group_by=day|week|month
