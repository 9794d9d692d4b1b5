"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field

from bildval.adapters.supabase_score_repository import SupabaseScoreRepository


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    last_limit: int | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeTable":
        self.last_limit = count
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_score_repository_insert() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseScoreRepository(client)

    repository.create_score(game="bildval", mode="easy", score=70)

    assert client.tables["scores"].last_payload == {
        "game": "bildval",
        "mode": "easy",
        "score": 70,
    }


def test_supabase_score_repository_list() -> None:
    client = FakeSupabaseClient()
    scores_table = client.table("scores")
    scores_table.queue("select", [{"score": 120}, {"score": 80}])
    repository = SupabaseScoreRepository(client)

    scores = repository.list_scores(game="bildval", mode="hard", limit=5)

    assert scores == [120, 80]
    assert scores_table.last_filters == [("game", "bildval"), ("mode", "hard")]
    assert scores_table.last_order == ("score", True)
    assert scores_table.last_limit == 5


def test_supabase_score_repository_empty_response() -> None:
    client = FakeSupabaseClient()
    client.table("scores").queue("select", [])

    assert SupabaseScoreRepository(client).list_scores("bildval", "easy", 10) == []
