"""
Ogmo project documents.

Provides the project model with its value, layer and entity templates, and
the tilesets used to slice tile layer images.
"""

from .models import Project, EntityTemplate, Shape
from .layers import (
    LayerTemplate,
    TileLayerTemplate,
    GridLayerTemplate,
    EntityLayerTemplate,
    DecalLayerTemplate,
    LAYER_TEMPLATE_TYPES,
)
from .values import (
    ValueTemplate,
    BooleanValueTemplate,
    ColorValueTemplate,
    EnumValueTemplate,
    IntegerValueTemplate,
    FloatValueTemplate,
    StringValueTemplate,
    TextValueTemplate,
    VALUE_TEMPLATE_TYPES,
)
from .tilesets import Tileset

__all__ = [
    # Project model
    'Project',
    'EntityTemplate',
    'Shape',
    'Tileset',

    # Layer templates
    'LayerTemplate',
    'TileLayerTemplate',
    'GridLayerTemplate',
    'EntityLayerTemplate',
    'DecalLayerTemplate',
    'LAYER_TEMPLATE_TYPES',

    # Value templates
    'ValueTemplate',
    'BooleanValueTemplate',
    'ColorValueTemplate',
    'EnumValueTemplate',
    'IntegerValueTemplate',
    'FloatValueTemplate',
    'StringValueTemplate',
    'TextValueTemplate',
    'VALUE_TEMPLATE_TYPES',
]
