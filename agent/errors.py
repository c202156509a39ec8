class InvalidInputError(ValueError):
    """
    Caller-visible rejection raised before any provider is contacted.

    The only error that crosses the orchestrator boundary; every AI failure
    is absorbed into a retry, a provider switch or a canned answer.
    """

    def __init__(self, message: str, field: str = "prompt"):
        super().__init__(message)
        self.field = field
