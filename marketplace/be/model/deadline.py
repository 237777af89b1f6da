"""
Deadline processing for orders.

Orders whose acceptance deadline passed while the payment was only
authorized are cancelled; orders whose merchant confirmation deadline
passed after delivery are completed. Every invocation reports a
CronResult with the number of orders moved to each terminal state.
"""
import logging
from datetime import datetime, timezone
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from be.model import db_conn
from be.model import store
from be.model import error
from be.model.config import Config, DEFAULT_BATCH_LIMIT
from be.model.db_schema import (
    Order,
    Revenue,
    SystemLog,
    STATUS_PAYMENT_AUTHORIZED,
    STATUS_SUBMITTED,
    STATUS_REVIEW_PENDING,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
)

RPC_NAME = "handle_cron_deadlines"

CANCELLABLE_STATUSES = (STATUS_PAYMENT_AUTHORIZED,)
COMPLETABLE_STATUSES = (STATUS_SUBMITTED, STATUS_REVIEW_PENDING)


class CronResult:
    """Counts for one deadline run. total_processed is always the sum."""

    def __init__(self, cancelled: int = 0, completed: int = 0):
        if cancelled < 0 or completed < 0:
            raise error.error_inconsistent_result(
                f"negative count (cancelled={cancelled}, completed={completed})"
            )
        self.cancelled = cancelled
        self.completed = completed

    @property
    def total_processed(self) -> int:
        return self.cancelled + self.completed

    @classmethod
    def from_payload(cls, payload) -> "CronResult":
        """
        Build a result from the JSON the database procedure returned.

        An absent result counts as a run that found nothing to do.
        """
        if isinstance(payload, list):
            payload = payload[0] if payload else None
        if not payload:
            return cls()
        if not isinstance(payload, dict):
            raise error.error_inconsistent_result(f"unexpected payload {payload!r}")

        counts = {}
        for key in ("cancelled", "completed"):
            value = payload.get(key, 0)
            if isinstance(value, bool) or not isinstance(value, int):
                raise error.error_inconsistent_result(f"{key}={value!r}")
            counts[key] = value

        result = cls(**counts)
        reported = payload.get("total_processed")
        if reported is not None and reported != result.total_processed:
            raise error.error_inconsistent_result(
                f"total_processed={reported!r} but cancelled + completed = {result.total_processed}"
            )
        return result

    def to_dict(self) -> dict:
        return {
            "cancelled": self.cancelled,
            "completed": self.completed,
            "total_processed": self.total_processed,
        }

    def __eq__(self, other):
        if not isinstance(other, CronResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (
            f"CronResult(cancelled={self.cancelled}, completed={self.completed}, "
            f"total_processed={self.total_processed})"
        )


class DeadlineProcessor:
    def handle_cron_deadlines(self, now: datetime = None) -> CronResult:
        raise NotImplementedError

    def ping(self):
        raise NotImplementedError


class RpcDeadlineProcessor(DeadlineProcessor):
    """Delegates to the stored procedure on the platform database.

    The procedure evaluates deadlines against the database clock, so
    ``now`` is ignored here.
    """

    def __init__(self, client):
        self.client = client

    def handle_cron_deadlines(self, now: datetime = None) -> CronResult:
        response = self.client.rpc(RPC_NAME, {}).execute()
        return CronResult.from_payload(getattr(response, "data", None))

    def ping(self):
        self.client.table("profiles").select("id").limit(1).execute()


class SqlDeadlineProcessor(DeadlineProcessor):
    def __init__(self, batch_limit: int = DEFAULT_BATCH_LIMIT):
        self.batch_limit = batch_limit

    def handle_cron_deadlines(self, now: datetime = None) -> CronResult:
        od = OrderDeadlines()
        return od.handle_cron_deadlines(now=now, batch_limit=self.batch_limit)

    def ping(self):
        store.get_store().ping()


class OrderDeadlines(db_conn.DBConn):
    def __init__(self):
        db_conn.DBConn.__init__(self)

    def handle_cron_deadlines(self, now: datetime = None, batch_limit: int = DEFAULT_BATCH_LIMIT) -> CronResult:
        if now is None:
            now = datetime.now(timezone.utc)

        try:
            cancelled = self._cancel_expired(now, batch_limit)
            completed = self._complete_expired(now, batch_limit)
            # One commit for the whole batch; counts are only reported after it
            self.conn.commit()
        except SQLAlchemyError as e:
            self.conn.rollback()
            logging.error(f"deadline batch rolled back: {e}")
            raise error.error_upstream(str(e))
        except Exception:
            self.conn.rollback()
            raise

        return CronResult(cancelled=cancelled, completed=completed)

    def _candidates(self, statuses, deadline_column, now, batch_limit):
        # SKIP LOCKED lets overlapping runs split the backlog instead of waiting
        return (
            self.conn.query(Order)
            .filter(
                Order.status.in_(statuses),
                deadline_column.isnot(None),
                deadline_column < now,
            )
            .order_by(deadline_column.asc())
            .limit(batch_limit)
            .with_for_update(skip_locked=True)
            .all()
        )

    def claim(self, order_id: str, from_statuses, **values) -> bool:
        """
        Move one order out of ``from_statuses``.

        Returns False when another run already moved it, so it is never
        counted twice even on engines without row locks.
        """
        result = self.conn.execute(
            update(Order)
            .where(Order.id == order_id, Order.status.in_(from_statuses))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def _cancel_expired(self, now, batch_limit) -> int:
        orders = self._candidates(CANCELLABLE_STATUSES, Order.acceptance_deadline, now, batch_limit)
        count = 0
        for o in orders:
            claimed = self.claim(
                o.id,
                CANCELLABLE_STATUSES,
                status=STATUS_CANCELLED,
                cancelled_at=now,
                updated_at=now,
            )
            if not claimed:
                continue
            self.conn.add(SystemLog(
                event_type="cron",
                message="Order cancelled - timeout",
                details={
                    "order_id": o.id,
                    "payment_intent": o.stripe_payment_intent_id,
                    "action": "cancel_authorization",
                },
                created_at=now,
            ))
            count += 1
        return count

    def _complete_expired(self, now, batch_limit) -> int:
        orders = self._candidates(COMPLETABLE_STATUSES, Order.merchant_confirm_deadline, now, batch_limit)
        count = 0
        for o in orders:
            claimed = self.claim(
                o.id,
                COMPLETABLE_STATUSES,
                status=STATUS_COMPLETED,
                completed_at=now,
                updated_at=now,
            )
            if not claimed:
                continue

            has_revenue = self.conn.query(Revenue.id).filter_by(order_id=o.id).first()
            if has_revenue is None:
                self.conn.add(Revenue(
                    influencer_id=o.influencer_id,
                    order_id=o.id,
                    amount=o.total_amount,
                    net_amount=o.net_amount,
                    commission=o.total_amount - o.net_amount,
                    status="pending",
                    created_at=now,
                ))
            self.conn.add(SystemLog(
                event_type="cron",
                message="Order auto-completed",
                details={"order_id": o.id},
                created_at=now,
            ))
            count += 1
        return count


def build_deadline_processor(config: Config, client=None) -> DeadlineProcessor:
    if config.deadline_backend == "sql":
        return SqlDeadlineProcessor(batch_limit=config.deadline_batch_limit)
    if client is None:
        from be.model.supabase_client import create_admin_client
        client = create_admin_client(config)
    return RpcDeadlineProcessor(client)
