from datetime import datetime, timedelta, timezone
import pytest
from be.model import store
from be.model.db_schema import Order, STATUS_PAYMENT_AUTHORIZED, STATUS_SUBMITTED, STATUS_CANCELLED
from script import handle_deadlines


class TestHandleDeadlinesScript:
    @pytest.fixture(autouse=True)
    def prepare(self, tmp_path):
        self.url = "sqlite:///{}".format(tmp_path / "cron.db")
        s = store.init_database(str(tmp_path), self.url)
        session = s.get_db_session()
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        session.add(Order(id="o-1", status=STATUS_PAYMENT_AUTHORIZED, acceptance_deadline=past,
                          total_amount=10, net_amount=8))
        session.add(Order(id="o-2", status=STATUS_SUBMITTED, merchant_confirm_deadline=past,
                          total_amount=10, net_amount=8))
        session.commit()
        s.close()
        yield
        if store.database_instance is not None:
            store.database_instance.close()
            store.database_instance = None

    def test_runs_once(self, capsys):
        assert handle_deadlines.main({"POSTGRES_URL": self.url}) == 0
        assert "cancelled 1, completed 1, total 2." in capsys.readouterr().out

        session = store.get_db_conn()
        assert session.query(Order).filter_by(id="o-1").one().status == STATUS_CANCELLED

        assert handle_deadlines.main({"POSTGRES_URL": self.url}) == 0
        assert "cancelled 0, completed 0, total 0." in capsys.readouterr().out

    def test_failure_exit_status(self, monkeypatch):
        def boom(self, now=None):
            raise RuntimeError("database is locked")
        monkeypatch.setattr(handle_deadlines.SqlDeadlineProcessor, "handle_cron_deadlines", boom)
        assert handle_deadlines.main({"POSTGRES_URL": self.url}) == 1
