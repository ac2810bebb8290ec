from arcade.services.leaderboard import LeaderboardEntry, project_leaderboard, rank_entries, upsert_entry
from arcade.services.stats.aggregator import PlayerStats


def entry(address, score, tokens=0, badges=0):
    return LeaderboardEntry(address=address, display_name=address.lower(), total_score=score,
                            tokens_earned=tokens, badges=badges)


def test_empty_input_gives_empty_board():
    assert project_leaderboard({}) == []
    assert project_leaderboard([]) == []


def test_sorted_with_dense_positional_ranks():
    board = rank_entries([entry('A', 10), entry('B', 30), entry('C', 20)])
    assert [e.address for e in board] == ['B', 'C', 'A']
    assert [e.rank for e in board] == [1, 2, 3]


def test_ties_keep_arrival_order_and_distinct_ranks():
    board = rank_entries([entry('A', 50), entry('B', 70), entry('C', 50), entry('D', 50)])
    assert [(e.address, e.rank) for e in board] == [('B', 1), ('A', 2), ('C', 3), ('D', 4)]


def test_upsert_replaces_by_address_or_appends():
    entries = [entry('A', 10), entry('B', 20)]
    replaced = upsert_entry(entries, entry('A', 99))
    assert [(e.address, e.total_score) for e in replaced] == [('A', 99), ('B', 20)]
    appended = upsert_entry(entries, entry('C', 5))
    assert [e.address for e in appended] == ['A', 'B', 'C']


def test_single_submission_board():
    stats = PlayerStats(total_score=150, tokens_earned=10, games_played=1)
    board = project_leaderboard({'ALGOXYZ1234': stats})
    assert len(board) == 1
    assert board[0].to_dto() == {
        'rank': 1,
        'address': 'ALGOXYZ1234',
        'displayName': 'Player_1234',
        'totalScore': 150,
        'tokensEarned': 10,
        'badges': 0,
    }


def test_mapping_and_entry_forms_agree():
    stats = {
        'A': PlayerStats(total_score=40, tokens_earned=4, nft_badges=['First Steps']),
        'B': PlayerStats(total_score=90, tokens_earned=9),
    }
    names = {'A': 'a', 'B': 'b'}
    from_mapping = project_leaderboard(stats, names=names)
    from_entries = project_leaderboard([entry('A', 40, 4, 1)], upsert=entry('B', 90, 9))
    assert [e.to_dto() for e in from_mapping] == [e.to_dto() for e in from_entries]


def test_upsert_then_rank():
    board = project_leaderboard([entry('A', 100), entry('B', 80)], upsert=entry('B', 120))
    assert [(e.address, e.rank, e.total_score) for e in board] == [('B', 1, 120), ('A', 2, 100)]
