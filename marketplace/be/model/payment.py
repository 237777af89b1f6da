import stripe
from be.model import error

STRIPE_API_VERSION = "2023-10-16"
ONBOARDING_LINK_TYPE = "account_onboarding"


class AccountStatus:
    def __init__(self, details_submitted: bool = False, charges_enabled: bool = False, payouts_enabled: bool = False):
        self.details_submitted = bool(details_submitted)
        self.charges_enabled = bool(charges_enabled)
        self.payouts_enabled = bool(payouts_enabled)

    @property
    def fully_verified(self) -> bool:
        return self.details_submitted and self.charges_enabled and self.payouts_enabled


class OnboardingLink:
    def __init__(self, url: str, expires_at: int):
        self.url = url
        self.expires_at = expires_at


class PaymentAccountService:
    def retrieve_account(self, account_id: str) -> AccountStatus:
        raise NotImplementedError

    def create_onboarding_link(self, account_id: str, refresh_url: str, return_url: str) -> OnboardingLink:
        raise NotImplementedError

    def balance_check(self):
        raise NotImplementedError


class StripeAccountService(PaymentAccountService):
    """Stripe Connect calls, authenticated per request with the secret key."""

    def __init__(self, secret_key: str, api_version: str = STRIPE_API_VERSION):
        self.secret_key = secret_key
        self.api_version = api_version

    def _options(self):
        return {"api_key": self.secret_key, "stripe_version": self.api_version}

    def retrieve_account(self, account_id: str) -> AccountStatus:
        try:
            account = stripe.Account.retrieve(account_id, **self._options())
        except stripe.StripeError as e:
            raise error.error_upstream(e.user_message or str(e))
        return AccountStatus(
            details_submitted=getattr(account, "details_submitted", False),
            charges_enabled=getattr(account, "charges_enabled", False),
            payouts_enabled=getattr(account, "payouts_enabled", False),
        )

    def create_onboarding_link(self, account_id: str, refresh_url: str, return_url: str) -> OnboardingLink:
        try:
            link = stripe.AccountLink.create(
                account=account_id,
                refresh_url=refresh_url,
                return_url=return_url,
                type=ONBOARDING_LINK_TYPE,
                **self._options(),
            )
        except stripe.StripeError as e:
            raise error.error_upstream(e.user_message or str(e))
        return OnboardingLink(url=link.url, expires_at=link.expires_at)

    def balance_check(self):
        try:
            stripe.Balance.retrieve(**self._options())
        except stripe.StripeError as e:
            raise error.error_upstream(e.user_message or str(e))
