"""Application services."""

from .controller import (
    UploadController,
    configure_upload_controller,
    describe_failure,
    get_upload_controller,
    reset_upload_controller,
)

__all__ = [
    "UploadController",
    "configure_upload_controller",
    "describe_failure",
    "get_upload_controller",
    "reset_upload_controller",
]
