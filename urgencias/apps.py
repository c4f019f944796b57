from django.apps import AppConfig


class UrgenciasConfig(AppConfig):
    name = 'urgencias'
    verbose_name = 'Emergency intake'
