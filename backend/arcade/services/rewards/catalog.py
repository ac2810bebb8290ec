from typing import Optional

BADGE_BASE_URL = 'https://algorandgamehub.com'

BADGE_CATALOG = [
    {
        'name': 'Snake Master',
        'description': 'Achieved a score of 500+ in Snake Challenge',
        'image': '🐍',
        'game_type': 'snake',
        'requirement': 'Score 500+ points in Snake Challenge',
        'rarity': 'epic',
    },
    {
        'name': 'Trivia Champion',
        'description': 'Perfect score in Crypto Trivia Challenge',
        'image': '🧠',
        'game_type': 'trivia',
        'requirement': 'Score 100% in Trivia Challenge',
        'rarity': 'legendary',
    },
    {
        'name': 'Strategy Master',
        'description': 'Won 25 consecutive Tic-Tac-Toe games',
        'image': '♟️',
        'game_type': 'tictactoe',
        'requirement': 'Win 25 Tic-Tac-Toe games',
        'rarity': 'rare',
    },
    {
        'name': 'First Steps',
        'description': 'Played your first game on Algorand Game Hub',
        'image': '👶',
        'game_type': 'any',
        'requirement': 'Play any game',
        'rarity': 'common',
    },
    {
        'name': 'High Scorer',
        'description': 'Achieved a personal best score',
        'image': '🎯',
        'game_type': 'any',
        'requirement': 'Set a new personal record',
        'rarity': 'common',
    },
    {
        'name': 'Crypto Enthusiast',
        'description': 'Completed your first blockchain transaction',
        'image': '💰',
        'game_type': 'any',
        'requirement': 'Complete a token reward transaction',
        'rarity': 'rare',
    },
]

_BY_NAME = {b['name']: b for b in BADGE_CATALOG}


def slug(name: str) -> str:
    return '_'.join(name.lower().split())


def find_badge(name: str) -> Optional[dict]:
    return _BY_NAME.get(name)


def badge_metadata(name: str) -> Optional[dict]:
    """NFT metadata for a catalog badge, or None if there is no template."""
    badge = find_badge(name)
    if badge is None:
        return None
    return {
        'name': badge['name'],
        'description': badge['description'],
        'image': badge['image'],
        'image_url': f"{BADGE_BASE_URL}/badges/{slug(badge['name'])}.png",
        'external_url': BADGE_BASE_URL,
        'attributes': [
            {'trait_type': 'Game Type', 'value': badge['game_type']},
            {'trait_type': 'Rarity', 'value': badge['rarity']},
            {'trait_type': 'Requirement', 'value': badge['requirement']},
        ],
    }
