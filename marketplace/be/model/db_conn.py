from be.model import store


class DBConn:
    def __init__(self):
        self.conn = store.get_db_conn()
