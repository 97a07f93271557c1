"""
shapegeo - процедурная генерация вершинных и индексных буферов.

Основные модули:
- mesh - сфера (в т.ч. частичная), куб, плоскость, цилиндр
- settings - параметры по умолчанию
- log - логирование
"""

from .mesh import (
    SphereGeometry,
    SphereParameters,
    BoxGeometry,
    PlaneGeometry,
    CylinderGeometry,
    MeshBuffers,
)

__version__ = '0.1.0'

__all__ = [
    'SphereGeometry',
    'SphereParameters',
    'BoxGeometry',
    'PlaneGeometry',
    'CylinderGeometry',
    'MeshBuffers',
]
