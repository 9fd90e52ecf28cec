from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .lib.env import PATHS

DEFAULT_CUDA_KEYRING_URL = (
    "https://developer.download.nvidia.com/compute/cuda/repos/debian12/x86_64/cuda-keyring_1.1-1_all.deb"
)
DEFAULT_UV_INSTALLER_URL = "https://astral.sh/uv/install.sh"

DEFAULT_CUDA_PACKAGES = [
    "cuda-toolkit-{v}",
    "libcu++-dev",
    "cuda-compiler-{v}",
    "cuda-libraries-dev-{v}",
    "cuda-driver-dev-{v}",
    "cuda-cudart-dev-{v}",
]

DEFAULT_DEV_PACKAGES = [
    "python3-dev",
    "build-essential",
    "git",
    "ca-certificates",
    "gnupg",
    "lsb-release",
]

# command -> package providing it
DEFAULT_UTILITIES = {
    "sudo": "sudo",
    "curl": "curl",
    "zip": "zip",
    "unzip": "unzip",
}


@dataclass(frozen=True)
class SetupConfig:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        sec = self.raw.get(name) or {}
        if not isinstance(sec, dict):
            raise ConfigError(f"config.{name} must be a mapping")
        return sec

    def _str_list(self, value: Any, key: str) -> List[str]:
        if not isinstance(value, list):
            raise ConfigError(f"config.{key} must be a list of strings")
        return [str(v).strip() for v in value if str(v).strip()]

    def with_overrides(self, **overrides: Any) -> "SetupConfig":
        """Return a copy with top-level keys replaced; None values are ignored."""
        raw = dict(self.raw)
        raw.update({k: v for k, v in overrides.items() if v is not None})
        return dataclasses.replace(self, raw=raw)

    # Top level

    @property
    def username(self) -> Optional[str]:
        u = self.raw.get("username")
        return str(u).strip() if u else None

    @property
    def assume_yes(self) -> bool:
        return bool(self.raw.get("assume_yes", False))

    @property
    def dev_packages(self) -> List[str]:
        return self._str_list(self.raw.get("dev_packages", DEFAULT_DEV_PACKAGES), "dev_packages")

    @property
    def utilities(self) -> Dict[str, str]:
        utils = self.raw.get("utilities", DEFAULT_UTILITIES)
        if not isinstance(utils, dict):
            raise ConfigError("config.utilities must map command -> package")
        return {str(k): str(v) for k, v in utils.items()}

    # apt

    @property
    def sources_list(self) -> str:
        return str(self._section("apt").get("sources_list") or PATHS.sources_list)

    @property
    def sources_dir(self) -> Optional[str]:
        apt = self._section("apt")
        if "sources_dir" in apt:
            return str(apt["sources_dir"]) if apt["sources_dir"] else None
        return PATHS.sources_dir

    @property
    def apt_component(self) -> str:
        return str(self._section("apt").get("component") or "non-free")

    # driver

    @property
    def driver_packages(self) -> List[str]:
        pkgs = self._section("driver").get("packages", ["nvidia-driver", "firmware-misc-nonfree"])
        out = self._str_list(pkgs, "driver.packages")
        if not out:
            raise ConfigError("config.driver.packages must name at least the driver package")
        return out

    # user

    @property
    def admin_group(self) -> str:
        return str(self._section("user").get("admin_group") or "sudo")

    @property
    def gpu_groups(self) -> List[str]:
        return self._str_list(self._section("user").get("gpu_groups", ["video", "render"]), "user.gpu_groups")

    # cuda

    @property
    def cuda_version(self) -> str:
        return str(self._section("cuda").get("version") or "12.6")

    @property
    def cuda_version_dashed(self) -> str:
        return self.cuda_version.replace(".", "-")

    @property
    def cuda_prefix(self) -> str:
        return str(self._section("cuda").get("install_prefix") or PATHS.cuda_prefix)

    @property
    def cuda_home(self) -> str:
        return str(Path(self.cuda_prefix) / f"cuda-{self.cuda_version}")

    @property
    def cuda_link(self) -> str:
        return str(Path(self.cuda_prefix) / "cuda")

    @property
    def keyring_package(self) -> str:
        return str(self._section("cuda").get("keyring_package") or "cuda-keyring")

    @property
    def keyring_url(self) -> str:
        return str(self._section("cuda").get("keyring_url") or DEFAULT_CUDA_KEYRING_URL)

    @property
    def cuda_packages(self) -> List[str]:
        pkgs = self._str_list(self._section("cuda").get("packages", DEFAULT_CUDA_PACKAGES), "cuda.packages")
        return [p.replace("{v}", self.cuda_version_dashed) for p in pkgs]

    # uv

    @property
    def uv_installer_url(self) -> str:
        return str(self._section("uv").get("installer_url") or DEFAULT_UV_INSTALLER_URL)

    @property
    def uv_bin_dirs(self) -> List[str]:
        """Home-relative directories the uv installer may drop its binary into."""
        return self._str_list(self._section("uv").get("bin_dirs", [".local/bin", ".cargo/bin"]), "uv.bin_dirs")

    # profiles

    @property
    def system_profile(self) -> str:
        return str(self._section("profile").get("system") or PATHS.system_profile)

    @property
    def user_profile_file(self) -> str:
        return str(self._section("profile").get("user_file") or ".bashrc")


def load_setup_config(path: Optional[str]) -> SetupConfig:
    if not path:
        return SetupConfig(raw={})

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("setup config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping/object")

    return SetupConfig(raw=raw)
