"""Splitpad - a split-pane terminal text editor."""

from .document import Document
from .undo import CommandLog, EditCommand
from .cursor import Cursor, Direction, Viewport
from .highlight import TokenClassifier, TokenType, LanguageProfile
from .pane import Pane, SearchOutcome
from .workspace import Workspace, SplitMode

__all__ = [
    'Document',
    'CommandLog',
    'EditCommand',
    'Cursor',
    'Direction',
    'Viewport',
    'TokenClassifier',
    'TokenType',
    'LanguageProfile',
    'Pane',
    'SearchOutcome',
    'Workspace',
    'SplitMode',
]
