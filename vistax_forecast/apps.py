from django.apps import AppConfig


class VistaxForecastConfig(AppConfig):
    name = 'vistax_forecast'
    verbose_name = 'VistaX Forecast'
