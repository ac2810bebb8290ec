"""Leaderboard projection.

Ranks are positional: after a stable sort by total score (highest first)
each entry gets ``index + 1``, so players tied on score keep their arrival
order and still get distinct ranks.
"""

from dataclasses import dataclass, replace
from typing import Iterable, List, Mapping, Optional, Union

from arcade.models import Player, as_number
from arcade.services.stats.aggregator import PlayerStats


@dataclass(frozen=True)
class LeaderboardEntry:
    address: str
    display_name: str
    total_score: float = 0
    tokens_earned: int = 0
    badges: int = 0
    rank: int = 0

    @classmethod
    def from_stats(cls, address: str, stats: PlayerStats, display_name: Optional[str] = None):
        return cls(
            address=address,
            display_name=display_name or Player.default_name(address),
            total_score=stats.total_score,
            tokens_earned=stats.tokens_earned,
            badges=len(stats.nft_badges),
        )

    @classmethod
    def from_player(cls, player: Player):
        return cls(
            address=player.address,
            display_name=player.display_name,
            total_score=as_number(player.total_score or 0),
            tokens_earned=player.tokens_earned or 0,
            badges=len(player.badges),
        )

    def to_dto(self):
        return {
            'rank': self.rank,
            'address': self.address,
            'displayName': self.display_name,
            'totalScore': as_number(self.total_score),
            'tokensEarned': self.tokens_earned,
            'badges': self.badges,
        }


def rank_entries(entries: Iterable[LeaderboardEntry]) -> List[LeaderboardEntry]:
    ordered = sorted(entries, key=lambda e: e.total_score, reverse=True)
    return [replace(entry, rank=i + 1) for i, entry in enumerate(ordered)]


def upsert_entry(entries: Iterable[LeaderboardEntry], entry: LeaderboardEntry) -> List[LeaderboardEntry]:
    """Replace the entry with the same address, or append it."""
    out = []
    replaced = False
    for existing in entries:
        if existing.address == entry.address:
            out.append(entry)
            replaced = True
        else:
            out.append(existing)
    if not replaced:
        out.append(entry)
    return out


def project_leaderboard(
    source: Union[Mapping[str, PlayerStats], Iterable[LeaderboardEntry]],
    upsert: Optional[LeaderboardEntry] = None,
    names: Optional[Mapping[str, str]] = None,
) -> List[LeaderboardEntry]:
    """Ranked leaderboard from ``{address: PlayerStats}`` or from entries.

    Mapping iteration order is taken as arrival order. ``upsert`` is merged
    in before ranking.
    """
    if isinstance(source, Mapping):
        names = names or {}
        entries = [
            LeaderboardEntry.from_stats(address, stats, names.get(address))
            for address, stats in source.items()
        ]
    else:
        entries = list(source)
    if upsert is not None:
        entries = upsert_entry(entries, upsert)
    return rank_entries(entries)


def current_leaderboard(limit: Optional[int] = None) -> List[LeaderboardEntry]:
    """Leaderboard of every stored player, arrival order being the player id."""
    players = Player.query.order_by(Player.id).all()
    ranked = project_leaderboard(LeaderboardEntry.from_player(p) for p in players)
    return ranked[:limit] if limit else ranked
