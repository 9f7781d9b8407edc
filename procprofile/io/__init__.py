# Profile file input/output

from .keyfile import KeyFile
from .profile_io import (
    FieldIssue,
    LoadResult,
    SaveResult,
    load_profile,
    save_profile,
    serialize_profile,
)
from .migrations import RULES, migrate_document, migrate_params, pending_rules

__all__ = [
    'KeyFile',
    'FieldIssue',
    'LoadResult',
    'SaveResult',
    'load_profile',
    'save_profile',
    'serialize_profile',
    'RULES',
    'migrate_document',
    'migrate_params',
    'pending_rules',
]
