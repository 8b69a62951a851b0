from app.db.repo.countries_repo import CountriesRepo
from app.db.repo.entitlements_repo import EntitlementsRepo
from app.db.repo.profiles_repo import ProfilesRepo
from app.db.repo.progress_repo import ProgressRepo
from app.db.repo.purchases_repo import PurchasesRepo
from app.db.repo.security_logs_repo import SecurityLogsRepo
from app.db.repo.user_roles_repo import UserRolesRepo

__all__ = [
    "CountriesRepo",
    "EntitlementsRepo",
    "ProfilesRepo",
    "ProgressRepo",
    "PurchasesRepo",
    "SecurityLogsRepo",
    "UserRolesRepo",
]
