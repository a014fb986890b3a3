from django.apps import AppConfig


class InputValidationConfig(AppConfig):
    """
    Configuration for the Input Validation app.

    This app provides:
    - Error-accumulating validators for the validation phase
    - Sanitizers that normalize text before validation
    - A view decorator that answers 400 with every error before business logic runs
    - System checks for the validation settings
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'input_validation'
    verbose_name = 'Input Validation'

    def ready(self):
        # Register system checks
        from . import checks  # noqa: F401
