import re
from typing import Dict

from storefront.schemas.checkout import CheckoutRequest

# Entity characters of Telegram's legacy Markdown parse mode
_MD_SPECIAL = re.compile(r"([_*`\[])")


def _md(value: str) -> str:
    return _MD_SPECIAL.sub(r"\\\1", str(value))


def money(value: float, currency: str) -> str:
    return f"{value:.2f} {currency}"


def order_summary(request: CheckoutRequest, currency: str) -> str:
    """Markdown order summary: contact fields, item lines, then the grand total."""
    currency = _md(currency)
    lines = "\n".join(
        f"• {_md(item.name)} × {item.quantity} — {money(item.line_total, currency)}"
        for item in request.items
    )
    return (
        "🧾 *New order* 🧾\n\n"
        f"👤 *Name*: {_md(request.name)}\n"
        f"📞 *Phone*: {_md(request.phone)}\n"
        f"📧 *Email*: {_md(request.email)}\n\n"
        "📦 *Items*:\n"
        f"{lines}\n\n"
        f"💰 *Total*: {money(request.total, currency)}"
    )


def order_email_params(request: CheckoutRequest, message: str) -> Dict[str, str]:
    return {
        "name": request.name,
        "phone": request.phone,
        "email": request.email,
        "message": message,
    }
