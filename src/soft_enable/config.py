"""
Soft Enable Configuration

Environment-driven settings shared by the mixin, the enablement filter and
the session bootstrap.
"""

import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./soft_enable.db")

# Attribute holding the enabled flag when a model does not set __enabled_column__
DEFAULT_ENABLED_COLUMN = os.getenv("SOFT_ENABLE_COLUMN", "enabled")

# enable()/disable() commit by default; "false" makes them flush only
COMMIT_ON_SAVE = os.getenv("SOFT_ENABLE_COMMIT_ON_SAVE", "true").lower() in ("1", "true", "yes")

# Execution option keys carried by queries and statements
VISIBILITY_OPTION = "soft_enable_visibility"
BYPASS_OPTION = "soft_enable_bypass"
