from fastapi import APIRouter, Depends

from storefront.client.checkout import CheckoutNotifier, build_notifier
from storefront.schemas.checkout import CheckoutRequest, CheckoutResult


router = APIRouter()

_notifier = None


def get_notifier() -> CheckoutNotifier:
    global _notifier
    if _notifier is None:
        _notifier = build_notifier()
    return _notifier


# Answers 200 even when every channel failed
@router.post("", response_model=CheckoutResult)
async def submit_checkout(payload: CheckoutRequest, notifier: CheckoutNotifier = Depends(get_notifier)):
    return await notifier.submit_checkout(payload)
