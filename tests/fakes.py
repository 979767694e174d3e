"""
In-memory stand-in for the parts of the supabase-py client the services use.

Supports the fluent table API (select/insert/update/delete with eq, neq, is_, in_, gte, lte,
lt, gt, or_, order, limit, maybe_single, single), Storage uploads and Edge Function calls.
Column lists in select() are ignored; whole rows are returned.
"""
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


def _comparable(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return str(value)


def _literal(text: str) -> Any:
    if text == "true":
        return True
    if text == "false":
        return False
    if text == "null":
        return None
    return text


def _equal(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool) or left is None or right is None:
        return left == right
    return _comparable(left) == _comparable(right)


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.operation = "select"
        self.payload: Any = None
        self.filters: List[Callable[[Dict[str, Any]], bool]] = []
        self.ordering: List[tuple] = []
        self.row_limit: Optional[int] = None
        self.single_mode: Optional[str] = None
        self.count_mode: Optional[str] = None

    # operations

    def select(self, *columns, count=None):
        self.operation = "select"
        self.count_mode = count
        return self

    def insert(self, data):
        self.operation = "insert"
        self.payload = data
        return self

    def upsert(self, data, **kwargs):
        self.operation = "upsert"
        self.payload = data
        return self

    def update(self, data):
        self.operation = "update"
        self.payload = data
        return self

    def delete(self):
        self.operation = "delete"
        return self

    # filters

    def _where(self, column: str, test: Callable[[Any], bool]):
        self.filters.append(lambda row: test(row.get(column)))
        return self

    def eq(self, column, value):
        return self._where(column, lambda v: _equal(v, value))

    def neq(self, column, value):
        return self._where(column, lambda v: not _equal(v, value))

    def is_(self, column, value):
        expected = _literal(value) if isinstance(value, str) else value
        return self._where(column, lambda v: v is expected if expected is None else v == expected)

    def in_(self, column, values):
        return self._where(column, lambda v: any(_equal(v, x) for x in values))

    def gte(self, column, value):
        return self._where(column, lambda v: v is not None and _comparable(v) >= _comparable(value))

    def gt(self, column, value):
        return self._where(column, lambda v: v is not None and _comparable(v) > _comparable(value))

    def lte(self, column, value):
        return self._where(column, lambda v: v is not None and _comparable(v) <= _comparable(value))

    def lt(self, column, value):
        return self._where(column, lambda v: v is not None and _comparable(v) < _comparable(value))

    def or_(self, expression: str):
        terms = []
        for term in expression.split(","):
            column, operator, value = term.split(".", 2)
            assert operator == "eq", f"unsupported or_ operator {operator}"
            terms.append((column, _literal(value)))
        self.filters.append(lambda row: any(_equal(row.get(c), v) for c, v in terms))
        return self

    # shaping

    def order(self, column, desc=False):
        self.ordering.append((column, desc))
        return self

    def limit(self, n):
        self.row_limit = n
        return self

    def maybe_single(self):
        self.single_mode = "maybe"
        return self

    def single(self):
        self.single_mode = "single"
        return self

    def _matching(self) -> List[Dict[str, Any]]:
        return [row for row in self.db.tables.setdefault(self.table_name, []) if all(f(row) for f in self.filters)]

    def execute(self):
        self.db.calls.append((self.table_name, self.operation))
        table = self.db.tables.setdefault(self.table_name, [])

        if self.operation in ("insert", "upsert"):
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for item in items:
                if self.operation == "upsert" and item.get("id"):
                    current = next((r for r in table if r.get("id") == item["id"]), None)
                    if current is not None:
                        current.update(item)
                        created.append(dict(current))
                        continue
                created.append(dict(self.db.add(self.table_name, item)))
            return FakeResponse(created)

        matched = self._matching()
        if self.operation == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(r) for r in matched])
        if self.operation == "delete":
            for row in matched:
                table.remove(row)
            return FakeResponse([dict(r) for r in matched])

        found = [dict(r) for r in matched]
        for column, desc in reversed(self.ordering):
            present = [r for r in found if r.get(column) is not None]
            missing = [r for r in found if r.get(column) is None]
            present.sort(key=lambda r: _comparable(r[column]), reverse=desc)
            found = missing + present if desc else present + missing
        count = len(found) if self.count_mode else None
        if self.row_limit is not None:
            found = found[:self.row_limit]

        if self.single_mode == "maybe":
            return FakeResponse(found[0], count) if found else None
        if self.single_mode == "single":
            if len(found) != 1:
                raise Exception(f"Expected one row in {self.table_name}, found {len(found)}")
            return FakeResponse(found[0], count)
        return FakeResponse(found, count)


class FakeBucket:
    def __init__(self, db: "FakeSupabase", name: str):
        self.db = db
        self.name = name

    def upload(self, path, content, file_options=None):
        self.db.uploads.append((self.name, path, content))
        return {"Key": f"{self.name}/{path}"}

    def get_public_url(self, path):
        return f"https://storage.test/{self.name}/{path}"


class FakeStorage:
    def __init__(self, db: "FakeSupabase"):
        self.db = db

    def from_(self, bucket):
        return FakeBucket(self.db, bucket)


class FakeFunctions:
    def __init__(self):
        self.invocations: List[tuple] = []
        self.reply: Any = b'{"reply": "ok"}'
        self.error: Optional[Exception] = None

    def invoke(self, name, invoke_options=None):
        self.invocations.append((name, invoke_options))
        if self.error:
            raise self.error
        return self.reply


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.uploads: List[tuple] = []
        self.storage = FakeStorage(self)
        self.functions = FakeFunctions()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def add(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert with the defaults the database would fill in"""
        stored = dict(row)
        stored.setdefault("id", str(uuid.uuid4()))
        stored.setdefault("created_at", datetime.utcnow().isoformat())
        self.tables.setdefault(table, []).append(stored)
        return stored

    def seed(self, table: str, *rows_to_add: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [self.add(table, r) for r in rows_to_add]

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.get(table, [])
