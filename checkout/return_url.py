"""
App-switch return URL helpers.

Wallet apps hand control back through a URL scheme that starts with the
host app's bundle id and is dedicated to payment returns, e.g.
``com.your-company.Your-App.payments``. The host registers that scheme and
routes matching URLs back into the drop-in SDK.
"""

from urllib.parse import urlsplit

from checkout.dropin import AppSwitch

RETURN_SCHEME_SUFFIX = "payments"


def return_url_scheme(bundle_id: str) -> str:
    return f"{bundle_id}.{RETURN_SCHEME_SUFFIX}"


def is_payment_return_url(url: str, bundle_id: str) -> bool:
    scheme = urlsplit(url).scheme
    return bool(scheme) and scheme.casefold() == return_url_scheme(bundle_id).casefold()


def handle_open_url(url: str, bundle_id: str, app_switch: AppSwitch) -> bool:
    """Route a URL opened by the host app.

    Payment returns go to the drop-in SDK's app switch, everything else is
    left to the host and reported as handled.
    """
    if is_payment_return_url(url, bundle_id):
        return app_switch.handle_open_url(url)
    return True
