class EntitlementError(Exception):
    pass


class InvalidEntitlementKeyError(EntitlementError):
    pass
