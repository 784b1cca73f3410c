from django.urls import re_path
from .views import vistax_forecast, tv_signal

# Trailing slash optional: webhook senders do not follow redirects
urlpatterns = [
    re_path(r'^vistax-forecast/?$', vistax_forecast, name='vistax-forecast'),
    re_path(r'^tv-signal/?$', tv_signal, name='tv-signal'),
]
