"""
Response normalizers.

The ONLY place where iOS / Android response differences are handled.
The billing client picks one normalizer per platform and never branches again.
"""

from .response_wrappers import (
    AndroidResponseNormalizer,
    IosResponseNormalizer,
    ResponseNormalizer,
    load_json,
    normalizer_for,
)

__all__ = [
    "AndroidResponseNormalizer",
    "IosResponseNormalizer",
    "ResponseNormalizer",
    "load_json",
    "normalizer_for",
]
