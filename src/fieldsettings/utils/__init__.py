"""
Document utilities for fieldsettings.

Pure functions over nested dicts: dot-path access, flattening and
merging, plus read-only views used for default documents.
"""

import fieldsettings.utils.dot_path as dot_path
import fieldsettings.utils.flatten as flatten
import fieldsettings.utils.frozen as frozen
import fieldsettings.utils.merge as merge

__all__ = ["dot_path", "flatten", "frozen", "merge"]
