"""
Audit Use Case DTOs
"""

from datetime import datetime
from typing import List

from helpdesk.app.use_cases.common import ApiModel, AuditEventInfo, Pagination


class AuditEventsResponse(ApiModel):
    events: List[AuditEventInfo]
    pagination: Pagination


class PurgeAuditEventsResponse(ApiModel):
    deleted: int
    cutoff: datetime
    retention_days: int
