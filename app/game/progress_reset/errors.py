class ProgressResetError(Exception):
    pass


class ResetBoundaryError(ProgressResetError):
    pass


class AdminRoleRequiredError(ProgressResetError):
    pass


class ProfileNotFoundError(ProgressResetError):
    pass
