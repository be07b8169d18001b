class ProgressError(ValueError):
    """A completion submission was rejected at the ledger boundary."""


class UnknownRecordError(ProgressError):
    """The user or training module referenced by a submission does not exist."""


class DuplicateCompletionError(ProgressError):
    """A repeat completion was submitted under the 'reject' policy."""
