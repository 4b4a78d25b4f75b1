class TrainerError(Exception):
    """Base class for errors the CLI reports instead of crashing."""

class StoreError(TrainerError):
    pass

class WordListError(TrainerError):
    pass
