from .user import user
from .business_profile import business_profile
from .survey import survey
from .assessment import assessment

__all__ = ["user", "business_profile", "survey", "assessment"]
