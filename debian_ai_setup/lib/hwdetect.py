from __future__ import annotations

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

NVIDIA_VENDOR_ID = "0x10de"


def normalize_arch(machine: str) -> str:
    m = machine.lower()
    return {
        "x86_64": "amd64",
        "amd64": "amd64",
        "aarch64": "arm64",
        "arm64": "arm64",
        "armv7l": "armhf",
        "armv6l": "armhf",
    }.get(m, m)


def _pci_vendor_ids(pci_root: Path) -> List[str]:
    ids: List[str] = []
    if not pci_root.exists():
        return ids
    for dev in sorted(pci_root.iterdir()):
        try:
            ids.append((dev / "vendor").read_text(encoding="utf-8").strip().lower())
        except OSError:
            continue
    return ids


def detect_nvidia_gpu(
    *,
    pci_root: str = "/sys/bus/pci/devices",
    wsl_gpu_node: str = "/dev/dxg",
) -> bool:
    """Best-effort check for an NVIDIA device.

    WSL does not expose PCI devices; the paravirtualized GPU shows up as /dev/dxg.
    """

    if NVIDIA_VENDOR_ID in _pci_vendor_ids(Path(pci_root)):
        return True
    if Path(wsl_gpu_node).exists():
        logger.info("WSL GPU node %s present", wsl_gpu_node)
        return True
    return False
