"""Per-endpoint method groups, obtained from :class:`~async_openai.client.Client`."""

from .base import APIResource
from .completions import Completions
from .edits import Edits
from .embeddings import Embeddings
from .files import Files
from .fine_tunes import FineTunes
from .images import Images
from .models import Models
from .moderations import Moderations

__all__ = [
    "APIResource",
    "Completions",
    "Edits",
    "Embeddings",
    "Files",
    "FineTunes",
    "Images",
    "Models",
    "Moderations",
]
