from django.urls import include, path

urlpatterns = [
    path("api/pumps/", include("pumps.urls")),
]
