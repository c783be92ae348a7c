"""
Linux device state provider using /dev/video* nodes and procfs.

A camera counts as in use when any process holds an open file descriptor on
its video node. Device names come from sysfs.
"""

import glob
import logging
import os
import re
from typing import List, Optional, Set

from ..models import CameraState
from .base import DeviceStateProvider
from ..exceptions import ProviderInitError, ProviderQueryError

logger = logging.getLogger(__name__)

_VIDEO_NODE = re.compile(r'video(\d+)$')


class LinuxProvider(DeviceStateProvider):
    """
    Linux provider scanning ``/proc/<pid>/fd`` for open video nodes.

    Processes owned by other users may not be inspectable without elevated
    privileges; those are skipped.
    """

    def __init__(self, dev_root: str = "/dev", sysfs_root: str = "/sys/class/video4linux",
                 proc_root: str = "/proc"):
        self.dev_root = dev_root
        self.sysfs_root = sysfs_root
        self.proc_root = proc_root

        if not os.path.isdir(self.proc_root):
            raise ProviderInitError(
                f"procfs not available at {self.proc_root}", provider=self.platform_name
            )
        logger.debug(f"Linux provider initialized with {len(self._find_video_nodes())} video nodes")

    @property
    def platform_name(self) -> str:
        return "linux"

    def query_state(self) -> CameraState:
        try:
            nodes = self._find_video_nodes()
            if not nodes:
                return CameraState(in_use=False)
            open_paths = self._collect_open_paths()
        except OSError as e:
            raise ProviderQueryError(
                f"Failed to query camera state: {e}", provider=self.platform_name, cause=e
            )

        for node in nodes:
            if node in open_paths:
                return CameraState(in_use=True, device_name=self._get_device_name(node))
        return CameraState(in_use=False)

    def _find_video_nodes(self) -> List[str]:
        """
        Find /dev/videoN nodes sorted by N.

        Returns:
            List[str]: Video node paths in enumeration order
        """
        nodes = [
            path for path in glob.glob(os.path.join(self.dev_root, "video*"))
            if _VIDEO_NODE.search(path)
        ]
        nodes.sort(key=lambda path: int(_VIDEO_NODE.search(path).group(1)))
        return nodes

    def _collect_open_paths(self) -> Set[str]:
        """Resolve every readable fd link of every process."""
        open_paths: Set[str] = set()

        for pid in os.listdir(self.proc_root):
            if not pid.isdigit():
                continue
            fd_dir = os.path.join(self.proc_root, pid, "fd")
            try:
                fds = os.listdir(fd_dir)
            except OSError:
                # Exited, or owned by another user
                continue
            for fd in fds:
                try:
                    open_paths.add(os.readlink(os.path.join(fd_dir, fd)))
                except OSError:
                    continue

        return open_paths

    def _get_device_name(self, node: str) -> Optional[str]:
        match = _VIDEO_NODE.search(node)
        name_file = os.path.join(self.sysfs_root, f"video{match.group(1)}", "name")
        try:
            with open(name_file, 'r') as f:
                name = f.read().strip()
        except OSError:
            return os.path.basename(node)
        return name or os.path.basename(node)
