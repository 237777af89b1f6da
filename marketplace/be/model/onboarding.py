import logging
from be.model import error
from be.model.identity import IdentityResolver, ProfileRepository
from be.model.payment import PaymentAccountService


class StripeOnboarding:
    """
    Issues Stripe Connect onboarding links for influencers.

    Each step gates the next one: no profile lookup without a resolved
    identity, no call to Stripe unless the caller is an influencer with
    a linked account. This handler never writes anything.
    """

    def __init__(
        self,
        identity: IdentityResolver,
        profiles: ProfileRepository,
        payments: PaymentAccountService,
        public_site_url: str,
    ):
        self.identity = identity
        self.profiles = profiles
        self.payments = payments
        self.public_site_url = public_site_url.rstrip("/")

    def default_refresh_url(self) -> str:
        return f"{self.public_site_url}/dashboard/stripe-refresh"

    def default_return_url(self) -> str:
        return f"{self.public_site_url}/dashboard/stripe-complete"

    def create_link(self, authorization: str, body: dict = None) -> (int, dict):
        try:
            return 200, self._create_link(authorization, body or {})
        except error.MarketplaceError as e:
            logging.error(f"Error in create-stripe-connect-onboarding ({e.code}): {e.message}")
            return 400, {"success": False, "error": e.message}
        except Exception as e:
            logging.exception("Error in create-stripe-connect-onboarding")
            return 400, {"success": False, "error": str(e)}

    def _create_link(self, authorization: str, body: dict) -> dict:
        if not authorization:
            raise error.error_missing_authorization()

        user = self.identity.resolve(authorization)

        profile = self.profiles.get_profile(user.id)
        if profile is None:
            raise error.error_profile_not_found()
        if not profile.is_influencer:
            raise error.error_not_influencer()
        if not profile.stripe_account_id:
            raise error.error_no_payment_account()

        logging.info(f"[Stripe Onboarding] User: {user.id}, Account: {profile.stripe_account_id}")

        account = self.payments.retrieve_account(profile.stripe_account_id)
        if account.fully_verified:
            return {
                "success": True,
                "message": "Account already fully configured",
                "alreadyComplete": True,
                "chargesEnabled": True,
                "payoutsEnabled": True,
            }

        link = self.payments.create_onboarding_link(
            profile.stripe_account_id,
            refresh_url=self._override(body, "refresh_url") or self.default_refresh_url(),
            return_url=self._override(body, "return_url") or self.default_return_url(),
        )
        return {"success": True, "url": link.url, "expiresAt": link.expires_at}

    @staticmethod
    def _override(body: dict, key: str):
        value = body.get(key) if isinstance(body, dict) else None
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None
