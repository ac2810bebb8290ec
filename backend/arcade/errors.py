"""Error taxonomy shared by routes, services and the reward worker.

Every error that reaches a request boundary is an ``ArcadeError`` and is
rendered by the handler registered in ``create_app`` as
``{"success": false, "message": ...}`` with its status code.
"""


class ArcadeError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'success': False, 'message': self.message}


class ValidationError(ArcadeError):
    """Malformed submission payload. Nothing has been mutated."""
    status_code = 400


class IdentityMissing(ArcadeError):
    """No connected wallet for an operation that needs one."""
    status_code = 401

    def __init__(self, message='Wallet not connected'):
        super().__init__(message)


class NotFound(ArcadeError):
    status_code = 404


class SessionNotFound(NotFound):
    pass


class IllegalEvent(ArcadeError):
    """Event not accepted by the session in its current phase."""
    status_code = 409


class PersistenceFailure(ArcadeError):
    """Durable write failed; the computed result is still valid in memory."""
    status_code = 503

    def __init__(self, message, stats=None, reward=None):
        super().__init__(message)
        self.stats = stats
        self.reward = reward

    def to_dict(self):
        out = super().to_dict()
        if self.stats is not None:
            out['stats'] = self.stats.to_dict()
        if self.reward is not None:
            out['reward'] = self.reward.to_dict()
        return out


class RewardIssuanceFailure(ArcadeError):
    """Token transfer or badge mint failed. Never rolls back scoring."""
    status_code = 502


class LedgerTimeout(RewardIssuanceFailure):
    status_code = 504
