"""Universal Transcoding Plugin.

Registers custom VOD encoder profiles and encoder priorities with a host
video platform, driven by admin-configurable settings. The host entry
points are ``utp.plugin.register`` and ``utp.plugin.unregister``.
"""

from utp.models import (
    DEFAULT_ENCODER_PRIORITY,
    EncoderOptions,
    EncoderPriority,
    EncoderProfile,
    MediaKind,
    ProfileRecipe,
)
from utp.options import format_options, parse_options_string
from utp.reconciler import ProfileReconciler, reconcile

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Models
    "DEFAULT_ENCODER_PRIORITY",
    "EncoderOptions",
    "EncoderPriority",
    "EncoderProfile",
    "MediaKind",
    "ProfileRecipe",
    # Tokenizer
    "format_options",
    "parse_options_string",
    # Reconciler
    "ProfileReconciler",
    "reconcile",
]
