from app.services.user_service import UserService
from app.services.child_service import ChildService
from app.services.event_service import EventService
from app.services.registration_service import RegistrationService, Registrant, AdmissionResult
