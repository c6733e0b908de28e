"""Page controllers: data loading and persistence for the list and form pages."""

from .base import ListPageController, Notification, Notifier
from .entities import EntitiesController
from .entity_form import EntityForm, EntityFormData
from .installments import INSTALLMENT_BULK_EDIT_FIELDS, InstallmentsController

__all__ = [
    "ListPageController",
    "Notification",
    "Notifier",
    "EntitiesController",
    "EntityForm",
    "EntityFormData",
    "InstallmentsController",
    "INSTALLMENT_BULK_EDIT_FIELDS",
]
