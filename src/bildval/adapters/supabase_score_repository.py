"""Supabase repository for leaderboard scores."""

from dataclasses import dataclass

from supabase import Client

from bildval.services.scores import ScoreRepository


@dataclass
class SupabaseScoreRepository(ScoreRepository):
    """Supabase-backed score repository."""

    client: Client

    def create_score(self, game: str, mode: str, score: int) -> None:
        """Insert a score row."""
        self.client.table("scores").insert(
            {"game": game, "mode": mode, "score": score}
        ).execute()

    def list_scores(self, game: str, mode: str, limit: int) -> list[int]:
        """Return the highest scores for a game mode."""
        response = (
            self.client.table("scores")
            .select("score")
            .eq("game", game)
            .eq("mode", mode)
            .order("score", desc=True)
            .limit(limit)
            .execute()
        )
        return [int(row.get("score", 0)) for row in response.data or []]
