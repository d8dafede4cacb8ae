import uuid

from django.db import models
from model_utils.models import TimeStampedModel


class BaseModel(TimeStampedModel):
    """
    Abstract base for every domain table.

    Provides:
        - id: UUID primary key
        - created: set once on insert
        - modified: refreshed on every save
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True
