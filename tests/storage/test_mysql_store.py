from gradewise.database.mysql_store import MySQLKeyValueStore


class FakeCursor:
    def __init__(self, table):
        self._table = table
        self._row = None

    def execute(self, sql, params):
        verb = sql.strip().split()[0].upper()
        if verb == "SELECT":
            value = self._table.get(params[0])
            self._row = {"store_value": value} if value is not None else None
        elif verb == "INSERT":
            self._table[params[0]] = params[1]
        elif verb == "DELETE":
            self._table.pop(params[0], None)

    def fetchone(self):
        return self._row

    def close(self):
        pass


class FakeConnection:
    def __init__(self, table):
        self._table = table
        self.commits = 0

    def cursor(self, dictionary=False):
        return FakeCursor(self._table)

    def commit(self):
        self.commits += 1

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self):
        self.table = {}

    def connect(self, *, with_database=True):
        return FakeConnection(self.table)


def test_mysql_store_get_set_delete():
    factory = FakeConnectionFactory()
    store = MySQLKeyValueStore(factory)

    assert store.get("app_users") is None

    store.set("app_users", "[]")
    store.set("app_users", '[{"id": "u1"}]')
    assert store.get("app_users") == '[{"id": "u1"}]'

    store.delete("app_users")
    assert store.get("app_users") is None
