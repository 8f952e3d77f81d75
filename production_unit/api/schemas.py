from typing import Optional
from pydantic import BaseModel, StrictInt, StrictStr


class ProductionStepPayload(BaseModel):
    """
    Decoded POST /productionSteps body.

    Every field is optional here so that absent fields surface as
    "Missing required fields" rather than a decode error. Types are
    strict: "123" is not a device_id.
    """
    device_id: Optional[StrictInt] = None
    timestamp: Optional[StrictStr] = None
    status: Optional[StrictStr] = None
    operator: Optional[StrictStr] = None
