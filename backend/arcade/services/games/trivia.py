from arcade.errors import IllegalEvent
from .base import PLAYING, QUESTION_RESULT, GameKernel, GameType

QUESTION_TIME = 30
TOTAL_QUESTIONS = 10
# Seconds the result/explanation stays up before the next question
RESULT_TIME = 3

POINTS = {'easy': 10, 'medium': 15, 'hard': 20}

QUESTIONS = [
    {
        'id': 1,
        'question': 'What is the consensus mechanism used by Algorand?',
        'options': ['Proof of Work', 'Proof of Stake', 'Pure Proof of Stake', 'Delegated Proof of Stake'],
        'answer': 2,
        'difficulty': 'medium',
        'explanation': 'Algorand uses Pure Proof of Stake (PPoS), which is more energy-efficient and faster than traditional PoS.',
    },
    {
        'id': 2,
        'question': 'What is the native token of the Algorand blockchain?',
        'options': ['ALG', 'ALGO', 'ALD', 'AGO'],
        'answer': 1,
        'difficulty': 'easy',
        'explanation': 'ALGO is the native cryptocurrency of the Algorand blockchain ecosystem.',
    },
    {
        'id': 3,
        'question': 'What does ASA stand for in the Algorand ecosystem?',
        'options': ['Algorand Smart Asset', 'Algorand Staking Asset', 'Algorand Security Asset', 'Algorand System Asset'],
        'answer': 0,
        'difficulty': 'medium',
        'explanation': 'ASA stands for Algorand Smart Asset, which represents tokens created on the Algorand blockchain.',
    },
    {
        'id': 4,
        'question': 'What is the approximate block time for Algorand?',
        'options': ['1 second', '4.5 seconds', '10 seconds', '15 seconds'],
        'answer': 1,
        'difficulty': 'medium',
        'explanation': 'Algorand has an average block time of approximately 4.5 seconds, making it very fast for transactions.',
    },
    {
        'id': 5,
        'question': 'Who founded Algorand?',
        'options': ['Vitalik Buterin', 'Silvio Micali', 'Charles Hoskinson', 'Gavin Wood'],
        'answer': 1,
        'difficulty': 'hard',
        'explanation': 'Silvio Micali, a Turing Award winner and MIT professor, founded Algorand in 2017.',
    },
    {
        'id': 6,
        'question': 'What is the maximum supply of ALGO tokens?',
        'options': ['1 billion', '10 billion', '21 million', 'No maximum supply'],
        'answer': 1,
        'difficulty': 'hard',
        'explanation': 'Algorand has a maximum supply of 10 billion ALGO tokens.',
    },
    {
        'id': 7,
        'question': 'What is a smart contract called on Algorand?',
        'options': ['dApp', 'Smart Contract', 'Algorand Smart Contract (ASC1)', 'Teal Contract'],
        'answer': 2,
        'difficulty': 'medium',
        'explanation': 'Smart contracts on Algorand are called Algorand Smart Contracts version 1 (ASC1).',
    },
    {
        'id': 8,
        'question': 'What programming language is primarily used for Algorand smart contracts?',
        'options': ['Solidity', 'Rust', 'TEAL', 'JavaScript'],
        'answer': 2,
        'difficulty': 'medium',
        'explanation': 'TEAL (Transaction Execution Approval Language) is the primary language for Algorand smart contracts.',
    },
    {
        'id': 9,
        'question': 'What is the finality time for transactions on Algorand?',
        'options': ['Instant', '~4.5 seconds', '1 minute', '10 minutes'],
        'answer': 1,
        'difficulty': 'easy',
        'explanation': 'Algorand provides transaction finality in approximately 4.5 seconds with immediate finality guarantees.',
    },
    {
        'id': 10,
        'question': "What is Algorand's approach to scalability called?",
        'options': ['Sharding', 'Layer 2', 'Co-Chains', 'State Channels'],
        'answer': 2,
        'difficulty': 'hard',
        'explanation': 'Algorand uses Co-Chains for scalability, allowing multiple chains to run in parallel.',
    },
]

QUESTIONS_BY_ID = {q['id']: q for q in QUESTIONS}


def points_for(question, time_left) -> int:
    """Base points by difficulty plus one per five seconds left."""
    return POINTS[question['difficulty']] + time_left // 5


class Trivia(GameKernel):
    game_type = GameType.TRIVIA
    title = 'Crypto Trivia Challenge'
    tick_phases = (PLAYING, QUESTION_RESULT)

    def new_game(self, state, rng):
        picked = rng.sample(QUESTIONS, min(TOTAL_QUESTIONS, len(QUESTIONS)))
        state['questions'] = [q['id'] for q in picked]
        state['index'] = 0
        state['selected'] = None
        state['correct_answers'] = 0
        state['time_left'] = QUESTION_TIME
        state['last_result'] = None
        state['phase'] = PLAYING

    def current_question(self, state):
        return QUESTIONS_BY_ID[state['questions'][state['index']]]

    def on_select(self, state, event, rng):
        self.require_phase(state, PLAYING)
        answer = event.get('answer')
        options = self.current_question(state)['options']
        if not isinstance(answer, int) or not 0 <= answer < len(options):
            raise IllegalEvent('answer must index one of the options')
        state['selected'] = answer
        return []

    def on_submit(self, state, event, rng):
        self.require_phase(state, PLAYING)
        if 'answer' in event:
            self.on_select(state, event, rng)
        return self._resolve(state)

    def on_next(self, state, event, rng):
        self.require_phase(state, QUESTION_RESULT)
        return self._advance(state)

    def on_tick(self, state, event, rng):
        self.require_phase(state, PLAYING, QUESTION_RESULT)
        if state['phase'] == PLAYING:
            state['time_left'] = max(0, state['time_left'] - 1)
            if state['time_left'] == 0:
                return self._resolve(state)
            return []
        state['result_time'] -= 1
        if state['result_time'] <= 0:
            return self._advance(state)
        return []

    def _resolve(self, state):
        question = self.current_question(state)
        correct = state['selected'] == question['answer']
        points = points_for(question, state['time_left']) if correct else 0
        if correct:
            state['correct_answers'] += 1
            state['score'] += points
        state['last_result'] = {
            'question_id': question['id'],
            'correct': correct,
            'answer': question['answer'],
            'points': points,
            'explanation': question['explanation'],
        }
        state['phase'] = QUESTION_RESULT
        state['result_time'] = RESULT_TIME
        return [{'type': 'answered', 'correct': correct, 'points': points}]

    def _advance(self, state):
        if state['index'] < len(state['questions']) - 1:
            state['index'] += 1
            state['selected'] = None
            state['time_left'] = QUESTION_TIME
            state['phase'] = PLAYING
            return []
        return [self.finish(state)]
