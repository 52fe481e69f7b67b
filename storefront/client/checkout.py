import asyncio
import logging
from typing import List, Optional, Sequence

import httpx

from storefront.config import get_settings
from storefront.schemas.checkout import (
    ChannelOutcome,
    CheckoutRequest,
    CheckoutResult,
    Delivered,
    Failed,
)
from storefront.utils.order_templates import order_email_params, order_summary

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """A channel answered but refused the message."""


# ===== Channels =====

class TelegramChannel:
    name = "Telegram"

    def __init__(self, bot_token: str, chat_id: str, api_url: str = "https://api.telegram.org",
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_url = api_url.rstrip("/")
        self._transport = transport

    async def send(self, request: CheckoutRequest, text: str) -> None:
        url = f"{self.api_url}/bot{self.bot_token}/sendMessage"
        payload = {"chat_id": self.chat_id, "text": text, "parse_mode": "Markdown"}
        async with httpx.AsyncClient(transport=self._transport) as client:
            resp = await client.post(url, json=payload)
        if resp.status_code >= 400:
            raise DeliveryError(f"HTTP {resp.status_code}")
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if isinstance(body, dict) and body.get("ok") is False:
            raise DeliveryError(body.get("description") or "rejected by Telegram")


class EmailJsChannel:
    name = "Email"

    def __init__(self, service_id: str, template_id: str, public_key: str,
                 api_url: str = "https://api.emailjs.com",
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.service_id = service_id
        self.template_id = template_id
        self.public_key = public_key
        self.api_url = api_url.rstrip("/")
        self._transport = transport

    async def send(self, request: CheckoutRequest, text: str) -> None:
        payload = {
            "service_id": self.service_id,
            "template_id": self.template_id,
            "user_id": self.public_key,
            "template_params": order_email_params(request, text),
        }
        async with httpx.AsyncClient(transport=self._transport) as client:
            resp = await client.post(f"{self.api_url}/api/v1.0/email/send", json=payload)
        if resp.status_code >= 400:
            raise DeliveryError(f"HTTP {resp.status_code}: {resp.text[:200]}")


class ConsoleChannel:
    """Development backend: the order is logged instead of sent."""

    def __init__(self, name: str):
        self.name = name

    async def send(self, request: CheckoutRequest, text: str) -> None:
        logger.info("[%s:console] To=%s Body=%s", self.name, request.email, text)


# ===== Notifier =====

class CheckoutNotifier:
    def __init__(self, channels: Sequence, currency: str = "FCFA", timeout: float = 15.0):
        self.channels = list(channels)
        self.currency = currency
        self.timeout = timeout

    async def _deliver(self, channel, request: CheckoutRequest, text: str) -> ChannelOutcome:
        try:
            await asyncio.wait_for(channel.send(request, text), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Checkout delivery via %s timed out after %ss", channel.name, self.timeout)
            return Failed(channel.name, "timeout")
        except Exception as e:
            logger.error("Checkout delivery via %s failed: %s", channel.name, e, exc_info=True)
            return Failed(channel.name, str(e) or e.__class__.__name__)
        logger.info("Checkout delivered via %s", channel.name)
        return Delivered(channel.name)

    async def submit_checkout(self, request: CheckoutRequest) -> CheckoutResult:
        """Send the order summary over every channel at once.

        Channel failures never raise; they show up as ``Failed`` outcomes and
        ``success`` is true as soon as one channel delivered.
        """
        text = order_summary(request, self.currency)
        outcomes: List[ChannelOutcome] = await asyncio.gather(
            *(self._deliver(c, request, text) for c in self.channels)
        )
        result = CheckoutResult.from_outcomes(list(outcomes))
        logger.info("Checkout for %s finished: %s", request.email, result.message)
        return result


def build_notifier(settings=None, transport: Optional[httpx.AsyncBaseTransport] = None) -> CheckoutNotifier:
    settings = settings or get_settings()

    if settings.TELEGRAM_BOT_TOKEN and settings.TELEGRAM_CHAT_ID:
        telegram = TelegramChannel(
            settings.TELEGRAM_BOT_TOKEN,
            settings.TELEGRAM_CHAT_ID,
            api_url=settings.TELEGRAM_API_URL,
            transport=transport,
        )
    else:
        logger.warning("Telegram credentials missing; order messages will be logged instead.")
        telegram = ConsoleChannel("Telegram (console)")

    backend = (settings.EMAIL_BACKEND or "console").lower()
    has_keys = all([settings.EMAILJS_SERVICE_ID, settings.EMAILJS_TEMPLATE_ID, settings.EMAILJS_PUBLIC_KEY])
    if backend == "emailjs" and has_keys:
        email = EmailJsChannel(
            settings.EMAILJS_SERVICE_ID,
            settings.EMAILJS_TEMPLATE_ID,
            settings.EMAILJS_PUBLIC_KEY,
            api_url=settings.EMAILJS_API_URL,
            transport=transport,
        )
    else:
        if backend == "emailjs":
            logger.warning("EMAIL_BACKEND=emailjs but EmailJS keys missing. Falling back to console.")
        email = ConsoleChannel("Email (console)")

    return CheckoutNotifier(
        [telegram, email],
        currency=settings.CURRENCY,
        timeout=settings.CHANNEL_TIMEOUT_SECONDS,
    )


async def checkout(store, notifier: CheckoutNotifier, name: str, phone: str, email: str) -> CheckoutResult:
    """Submit the current cart; ordered lines leave the cart only when delivery succeeded.

    Lines added or raised while the notifier is awaited stay in the cart.
    """
    snapshot = store.snapshot()
    if not snapshot.items:
        raise ValueError("Cannot check out an empty cart")
    request = CheckoutRequest(
        items=snapshot.items,
        total=sum(i.line_total for i in snapshot.items),
        name=name,
        phone=phone,
        email=email,
    )
    result = await notifier.submit_checkout(request)
    if result.success:
        store.discard_ordered(snapshot.items)
    else:
        logger.warning("Checkout failed on every channel; cart kept for retry")
    return result
