class PoolException(Exception):
    """Base class for exceptions raised by the playoff pool."""
