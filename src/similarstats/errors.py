class SimilarStatsError(Exception):
    '''
    Base class for every error raised by similarstats.

    The analysis functions never raise in their default (lenient) mode; these
    only surface from strict mode, configuration loading and the file tooling.
    '''


class LengthMismatchError(SimilarStatsError, ValueError):
    '''
    Raised in strict mode when a pairwise operation receives sequences of different lengths.

    Parameters:
    -----------
    operation : str
        name of the operation that rejected its inputs
    left : int
        length of the left-hand sequence
    right : int
        length of the right-hand sequence
    '''

    def __init__(self, operation: str, left: int, right: int) -> None:
        self.operation = operation
        self.left = left
        self.right = right
        super().__init__(f'{operation}: length mismatch ({left} != {right})')


class ConfigError(SimilarStatsError, ValueError):
    '''Raised when a configuration file is malformed or holds out-of-range values.'''


class UnsupportedFormatError(SimilarStatsError, ValueError):
    '''Raised when a file suffix or output type is not one the tooling reads or writes.'''


__all__ = ['SimilarStatsError', 'LengthMismatchError', 'ConfigError', 'UnsupportedFormatError']
