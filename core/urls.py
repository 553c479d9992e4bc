from django.urls import path
from .views import PaymentIntentView, SubscriptionView, UploadView


urlpatterns = [
    path("create-payment-intent/", PaymentIntentView.as_view(), name="create-payment-intent"),
    path("create-subscription/", SubscriptionView.as_view(), name="create-subscription"),
    path("upload/", UploadView.as_view(), name="upload"),
]
