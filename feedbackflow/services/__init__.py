"""Services package."""

from .dispatcher import SUPPORTED_SERVICE_TYPES, deserialize, dispatch, dispatch_json, infer_payload
from .minifier import minify_comments, minify_text, minify_thread, minify_threads
from .preparer import (
    PreparedComments,
    ReductionEstimate,
    count_comments,
    estimate_reduction,
    prepare_for_analysis,
    prepare_json_for_analysis,
    threads_to_text,
)

__all__ = [
    "SUPPORTED_SERVICE_TYPES",
    "deserialize",
    "dispatch",
    "dispatch_json",
    "infer_payload",
    "minify_comments",
    "minify_text",
    "minify_thread",
    "minify_threads",
    "PreparedComments",
    "ReductionEstimate",
    "count_comments",
    "estimate_reduction",
    "prepare_for_analysis",
    "prepare_json_for_analysis",
    "threads_to_text",
]
