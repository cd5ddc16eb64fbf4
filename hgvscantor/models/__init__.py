from hgvscantor.models.models import (  # noqa: F401
    TranscriptChangeContextModel,
    TranscriptModel,
    VariantEffectsModel,
)
