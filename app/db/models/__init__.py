from app.db.models.base import Base
from app.db.models.countries import Country
from app.db.models.entitlements import Entitlement
from app.db.models.missions import Mission
from app.db.models.player_country_progress import PlayerCountryProgress
from app.db.models.profiles import Profile
from app.db.models.purchases import Purchase
from app.db.models.puzzle_pieces import PuzzlePiece
from app.db.models.security_logs import SecurityLogEntry
from app.db.models.user_badges import UserBadge
from app.db.models.user_fragments import UserFragment
from app.db.models.user_progress import UserProgress
from app.db.models.user_roles import UserRole
from app.db.models.user_story_state import UserStoryState
from app.db.models.user_tokens import UserToken

__all__ = [
    "Base",
    "Country",
    "Entitlement",
    "Mission",
    "PlayerCountryProgress",
    "Profile",
    "Purchase",
    "PuzzlePiece",
    "SecurityLogEntry",
    "UserBadge",
    "UserFragment",
    "UserProgress",
    "UserRole",
    "UserStoryState",
    "UserToken",
]
