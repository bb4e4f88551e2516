"""Exceptions raised while evaluating relocalisation results."""


class RelocEvalError(Exception):
    """Base class for evaluation failures."""


class MissingFileError(RelocEvalError, FileNotFoundError):
    """A pose file that had to be read does not exist."""


class PoseFormatError(RelocEvalError, ValueError):
    """A pose file does not hold a 4x4 matrix of numbers."""


class SequenceNotFoundError(RelocEvalError):
    """The folder structure of a sequence cannot be found."""
