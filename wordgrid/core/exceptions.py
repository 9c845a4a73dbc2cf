"""Custom exception hierarchy for puzzle generation and play."""


class WordGridError(Exception):
    """Base exception for engine failures."""


class ConfigurationError(WordGridError):
    """Raised when a puzzle cannot be configured; no state is created."""


class InvalidWordLength(ConfigurationError, ValueError):
    """Raised when a word length outside the supported range is requested."""


class UnrecognizedDifficulty(ConfigurationError, ValueError):
    """Raised when a difficulty name is not one of the known levels."""


class AssignmentExhausted(WordGridError):
    """Raised when no word combination satisfies the grid constraints.

    The candidate pool may simply not contain a satisfiable combination, so
    callers should offer a retry with fresh candidates.
    """

    retryable = True


class CollaboratorError(WordGridError):
    """Base for failures raised by external collaborators."""


class CandidateFetchFailed(CollaboratorError):
    """Raised when candidate words cannot be retrieved or parsed."""


class DefinitionFetchFailed(CollaboratorError):
    """Raised when a batch of word definitions cannot be retrieved."""


class RenderFailure(CollaboratorError):
    """Raised when the presentation layer fails to draw the board."""


class PuzzleFinished(WordGridError):
    """Raised when a swap is applied after the game has been won or lost."""
