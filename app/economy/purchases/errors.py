class PurchaseError(Exception):
    pass


class WebhookSignatureError(PurchaseError):
    pass


class WebhookPayloadError(PurchaseError):
    pass


class MissingUserMetadataError(WebhookPayloadError):
    pass


class UnknownTierError(WebhookPayloadError):
    pass
