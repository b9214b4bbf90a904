"""
Database base module - imports all models so they register with ``Base.metadata``.

Tables are owned and migrated by the platform's managed database; importing
this module is what lets ``Base.metadata.create_all`` build them for tests.
"""

from lms_api.affiliates.models.commission import Commission
from lms_api.affiliates.models.referral import Referral
from lms_api.auth.models.profile import Profile
from lms_api.billing.models.membership import UserMembership
from lms_api.billing.models.payment import Payment
from lms_api.courses.models.course import Course
from lms_api.db.session import Base

__all__ = [
    "Base",
    "Commission",
    "Course",
    "Payment",
    "Profile",
    "Referral",
    "UserMembership",
]
