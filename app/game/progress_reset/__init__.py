from app.game.progress_reset.boundaries import RETAINED_SEASONS_BY_BOUNDARY, resolve_retained_seasons
from app.game.progress_reset.service import ProgressResetService

__all__ = ["RETAINED_SEASONS_BY_BOUNDARY", "ProgressResetService", "resolve_retained_seasons"]
