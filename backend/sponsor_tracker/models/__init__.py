from sponsor_tracker.models.user import User
from sponsor_tracker.models.company import Company
from sponsor_tracker.models.application import Application
from sponsor_tracker.models.application_update import ApplicationUpdate
from sponsor_tracker.models.import_log import ImportLog

__all__ = ["User", "Company", "Application", "ApplicationUpdate", "ImportLog"]
