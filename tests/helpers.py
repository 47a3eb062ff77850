import os

from sizetree.models import Probe

DEEP_LEVELS: int = 1100


class ZeroDirProber:
    """Report files with their real size and directories as 0 bytes."""

    def __init__(self, fail_names: set[str] | None = None) -> None:
        self.fail_names: set[str] = fail_names or set()

    def probe(self, entry: os.DirEntry[str]) -> Probe | None:
        if entry.name in self.fail_names:
            return None

        st: os.stat_result = entry.stat(follow_symlinks=False)
        size: int = 0 if entry.is_dir(follow_symlinks=False) else st.st_size
        return Probe(size=size, identity=(st.st_dev, st.st_ino))
