"""Reusable annotated types for the CRM schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from salescrm.services.clock import to_local_naive

# Aware datetimes are stored as naive local time.
LocalDatetime = Annotated[datetime, AfterValidator(to_local_naive)]
