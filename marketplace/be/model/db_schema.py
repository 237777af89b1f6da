import uuid
from sqlalchemy import Column, String, Integer, Numeric, Text, DateTime, JSON, Index
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

# Order lifecycle
STATUS_PAYMENT_AUTHORIZED = "payment_authorized"
STATUS_IN_PROGRESS = "in_progress"
STATUS_SUBMITTED = "submitted"
STATUS_REVIEW_PENDING = "review_pending"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"
STATUS_DISPUTED = "disputed"


def new_id() -> str:
    return str(uuid.uuid4())


class Profile(Base):
    __tablename__ = 'profiles'
    id = Column(String(36), primary_key=True, default=new_id)
    role = Column(String(50), nullable=False)
    stripe_account_id = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=func.now())


class Order(Base):
    __tablename__ = 'orders'
    id = Column(String(36), primary_key=True, default=new_id)
    merchant_id = Column(String(36), index=True)
    influencer_id = Column(String(36), index=True)
    status = Column(String(50), nullable=False, default=STATUS_PAYMENT_AUTHORIZED)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    net_amount = Column(Numeric(12, 2), nullable=False, default=0)
    stripe_payment_intent_id = Column(String(255))

    # Merchant must accept before this, otherwise the authorization is released
    acceptance_deadline = Column(DateTime(timezone=True))
    # Merchant must confirm a delivery before this, otherwise it auto-completes
    merchant_confirm_deadline = Column(DateTime(timezone=True))

    cancelled_at = Column(DateTime(timezone=True))
    completed_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=func.now())
    updated_at = Column(DateTime(timezone=True), default=func.now())

    __table_args__ = (
        Index('idx_orders_status_acceptance', 'status', 'acceptance_deadline'),
        Index('idx_orders_status_confirm', 'status', 'merchant_confirm_deadline'),
    )


class Revenue(Base):
    __tablename__ = 'revenues'
    id = Column(Integer, primary_key=True, autoincrement=True)
    influencer_id = Column(String(36), index=True)
    order_id = Column(String(36), nullable=False, unique=True)
    amount = Column(Numeric(12, 2), nullable=False)
    net_amount = Column(Numeric(12, 2), nullable=False)
    commission = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), default="pending")  # pending, available, withdrawn
    created_at = Column(DateTime(timezone=True), default=func.now())


class SystemLog(Base):
    __tablename__ = 'system_logs'
    id = Column(Integer, primary_key=True, autoincrement=True)
    event_type = Column(String(50), nullable=False, index=True)
    message = Column(Text, nullable=False)
    details = Column(JSON)
    created_at = Column(DateTime(timezone=True), default=func.now())


def init_db_schema(engine):
    Base.metadata.create_all(engine)
