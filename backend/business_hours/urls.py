from django.urls import path
from . import views

app_name = 'business_hours'

urlpatterns = [
    path(
        'stores/<int:store_id>/',
        views.StoreBusinessHoursView.as_view(),
        name='store-business-hours'
    ),
    path(
        'stores/<int:store_id>/accounting-day/',
        views.AccountingDayView.as_view(),
        name='accounting-day'
    ),
]
