from surfacecrm.models.activity_log import ActivityLog
from surfacecrm.models.customer import Customer
from surfacecrm.models.email_log import EmailLog
from surfacecrm.models.note import Note

__all__ = ["ActivityLog", "Customer", "EmailLog", "Note"]
