from django.urls import include, path

urlpatterns = [
    path('api/', include('vistax_forecast.urls')),
]
