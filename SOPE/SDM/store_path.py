# =============================================================================
# store_path.py — On-device Shared Object Location
# =============================================================================
#
# AIR on Android writes local shared objects to:
#
#   <root>/<app id>/<app id>/Local Store/#SharedObjects/<name>.sol
#
# with <root> = /data/user/0.  Nothing here touches the filesystem.
# =============================================================================

from __future__ import annotations

import posixpath

from SOPE.SMM.constants import (
    ANDROID_DATA_ROOT, LOCAL_STORE_DIR, SHARED_OBJECTS_DIR,
    SO_EXTENSION, DEFAULT_SO_NAME,
)


def shared_object_path(
    app_id: str,
    so_name: str = DEFAULT_SO_NAME,
    root: str = ANDROID_DATA_ROOT,
) -> str:
    if not app_id:
        raise ValueError("app_id must not be empty")
    if not so_name.endswith(SO_EXTENSION):
        so_name += SO_EXTENSION
    return posixpath.join(
        root, app_id, app_id, LOCAL_STORE_DIR, SHARED_OBJECTS_DIR, so_name,
    )
