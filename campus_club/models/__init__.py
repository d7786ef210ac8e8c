from campus_club.models.user import User, Role
from campus_club.models.club import Club, ClubMembership
from campus_club.models.event import Event, EventRegistration, RegistrationStatus
from campus_club.models.announcement import Announcement, AnnouncementStatus
from campus_club.models.feedback import Feedback
from campus_club.models.admin_log import AdminActionLog, AdminAction

__all__ = [
    "User",
    "Role",
    "Club",
    "ClubMembership",
    "Event",
    "EventRegistration",
    "RegistrationStatus",
    "Announcement",
    "AnnouncementStatus",
    "Feedback",
    "AdminActionLog",
    "AdminAction",
]
