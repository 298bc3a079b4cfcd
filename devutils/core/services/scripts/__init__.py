"""
Shell-replacement scripts — small cross-platform conveniences.

    from devutils.core.services.scripts import get_script
    code = get_script("path", on_output=print).run()
"""

from __future__ import annotations

from devutils.core.services.scripts.base import Script, ScriptUsageError
from devutils.core.services.scripts.delete_files import DeleteFilesScript
from devutils.core.services.scripts.docker_clean import DockerCleanScript
from devutils.core.services.scripts.empty_trash import EmptyTrashScript
from devutils.core.services.scripts.git_backup import GitBackupScript
from devutils.core.services.scripts.hidden_files import HideHiddenFilesScript, ShowHiddenFilesScript
from devutils.core.services.scripts.ll import LongListScript
from devutils.core.services.scripts.ncu_update_all import NcuUpdateAllScript
from devutils.core.services.scripts.open import OpenScript
from devutils.core.services.scripts.org_by_date import OrgByDateScript
from devutils.core.services.scripts.path import PathScript
from devutils.core.services.scripts.search import SearchScript

SCRIPTS: dict[str, type[Script]] = {
    cls.name: cls
    for cls in (
        DeleteFilesScript,
        DockerCleanScript,
        EmptyTrashScript,
        GitBackupScript,
        HideHiddenFilesScript,
        LongListScript,
        NcuUpdateAllScript,
        OpenScript,
        OrgByDateScript,
        PathScript,
        SearchScript,
        ShowHiddenFilesScript,
    )
}


def get_script(name: str, **kwargs) -> Script | None:
    cls = SCRIPTS.get(name)
    return cls(**kwargs) if cls else None


def list_scripts() -> list[str]:
    return sorted(SCRIPTS)


__all__ = ["SCRIPTS", "Script", "ScriptUsageError", "get_script", "list_scripts"]
