from app.models.user import User
from app.models.child import Child
from app.models.event import Event
from app.models.event_supervisor import EventSupervisor
from app.models.event_registration import EventRegistration
from app.models.enums import EventStatus, UserRole, AllowedRegistrants, AuthType, EditAction
