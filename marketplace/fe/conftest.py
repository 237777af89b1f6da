import uuid
from datetime import timedelta
from unittest.mock import MagicMock
import pytest
from be import serve
from be.model import store
from be.model.config import Config
from be.model.db_schema import Order, STATUS_PAYMENT_AUTHORIZED
from be.model.identity import JwtIdentityResolver, ProfileRepository
from be.model.payment import PaymentAccountService
from fe.access.auth import JWT_SECRET
from fe.conf import NOW, ALLOWED_ORIGIN, PUBLIC_SITE_URL


@pytest.fixture
def config():
    return Config(
        allowed_origin=ALLOWED_ORIGIN,
        public_site_url=PUBLIC_SITE_URL + "/",
        supabase_jwt_secret=JWT_SECRET,
    )


@pytest.fixture
def db(tmp_path):
    s = store.init_database(str(tmp_path))
    yield s
    s.close()
    store.database_instance = None


@pytest.fixture
def make_order(db):
    session = db.get_db_session()

    def _make(status=STATUS_PAYMENT_AUTHORIZED, acceptance_deadline=None, merchant_confirm_deadline=None,
              total_amount=100, net_amount=80, influencer_id=None, **kwargs):
        order = Order(
            id=str(uuid.uuid4()),
            merchant_id=str(uuid.uuid4()),
            influencer_id=influencer_id or str(uuid.uuid4()),
            status=status,
            acceptance_deadline=acceptance_deadline,
            merchant_confirm_deadline=merchant_confirm_deadline,
            total_amount=total_amount,
            net_amount=net_amount,
            created_at=NOW - timedelta(days=5),
            updated_at=NOW - timedelta(days=5),
            **kwargs,
        )
        session.add(order)
        session.commit()
        return order.id

    return _make


@pytest.fixture
def processor():
    return MagicMock()


@pytest.fixture
def profiles():
    return MagicMock(spec=ProfileRepository)


@pytest.fixture
def payments():
    return MagicMock(spec=PaymentAccountService)


@pytest.fixture
def app(config, processor, profiles, payments):
    return serve.create_app(
        config,
        deadline_processor=processor,
        identity_resolver=JwtIdentityResolver(JWT_SECRET),
        profile_repository=profiles,
        payment_service=payments,
    )


@pytest.fixture
def client(app):
    return app.test_client()
