"""CLI decorators"""

from .inputs import action_options, collect_inputs

__all__ = [
    'action_options',
    'collect_inputs',
]
