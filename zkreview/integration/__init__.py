"""
zkreview.integration
====================

One-stop entrypoint: turn a DKIM-signed header plus a review into the public
output triple and the review record.

    from zkreview.integration import SubmissionRequest, process

    result = process(SubmissionRequest(...))
    if result:
        signals = result.outputs.public_signals()
    else:
        print(result.error.to_dict())
"""

from __future__ import annotations

from .assembler import check_request, process, process_or_raise
from .types import (
    AssemblyResult,
    PublicOutputs,
    ReviewSubmission,
    SubmissionRequest,
    canonical_json_bytes,
)

__all__ = [
    "check_request",
    "process",
    "process_or_raise",
    "AssemblyResult",
    "PublicOutputs",
    "ReviewSubmission",
    "SubmissionRequest",
    "canonical_json_bytes",
]
