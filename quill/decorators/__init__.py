from quill.decorators.timing import timed
from quill.decorators.with_retry import RETRIABLE_EXCEPTIONS, with_retry

__all__ = ["RETRIABLE_EXCEPTIONS", "timed", "with_retry"]
