from django.apps import AppConfig


class CreatorsConfig(AppConfig):
    name = "apps.creators"
    verbose_name = "Creators"
