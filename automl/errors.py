"""
Exception types raised by the comparison harness.

Caller-input problems (``DimensionMismatch``, ``EmptyDatasetError``,
``InvalidConfiguration``) abort a comparison. ``ModelFitFailure`` is raised
while evaluating one model and is turned into a per-model failure marker by
the runner.
"""


class AutoMLError(Exception):
    """Base class for all errors raised by this package."""


class DimensionMismatch(AutoMLError, ValueError):
    """Features, targets or prediction vectors disagree in length or width."""


class EmptyDatasetError(AutoMLError, ValueError):
    """A comparison was requested on a dataset with no rows."""


class InvalidConfiguration(AutoMLError, ValueError):
    """A configuration value is out of range or unknown."""


class ModelFitFailure(AutoMLError):
    """A single model could not be fitted or produced unusable predictions."""

    def __init__(self, model_name: str, reason: str):
        super().__init__(f"{model_name}: {reason}")
        self.model_name = model_name
        self.reason = reason
