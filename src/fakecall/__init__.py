"""Fake Call - generated one-sided phone conversations with character voices."""

__version__ = "0.1.0"

from .characters import (
    FALLBACK_SCRIPTS,
    VOICES,
    CategoryKey,
    get_fallback_script,
    match_category,
    resolve_voice_id,
)
from .conversation import ConversationResolver, ModelCandidate
from .diagnostics import Diagnostics
from .models import ConversationResult, SynthesisResult, UpstreamError
from .speech import SpeechSynthesizer

__all__ = [
    "FALLBACK_SCRIPTS",
    "VOICES",
    "CategoryKey",
    "get_fallback_script",
    "match_category",
    "resolve_voice_id",
    "ConversationResolver",
    "ModelCandidate",
    "Diagnostics",
    "ConversationResult",
    "SynthesisResult",
    "UpstreamError",
    "SpeechSynthesizer",
]
