from .step_10_check_privileges import CheckPrivilegesStep
from .step_15_confirm import ConfirmStep
from .step_20_enable_non_free import EnableNonFreeStep
from .step_25_upgrade_system import UpgradeSystemStep
from .step_30_kernel_headers import KernelHeadersStep
from .step_35_nvidia_driver import NvidiaDriverStep
from .step_40_base_utilities import BaseUtilitiesStep
from .step_45_select_user import SelectUserStep
from .step_50_configure_user import ConfigureUserStep
from .step_55_cuda_keyring import CudaKeyringStep
from .step_60_cuda_toolkit import CudaToolkitStep
from .step_65_cuda_environment import CudaEnvironmentStep
from .step_70_dev_tools import DevToolsStep
from .step_75_install_uv import InstallUvStep
from .step_80_cleanup import CleanupStep
from .step_90_summary import SummaryStep

__all__ = [
    "CheckPrivilegesStep",
    "ConfirmStep",
    "EnableNonFreeStep",
    "UpgradeSystemStep",
    "KernelHeadersStep",
    "NvidiaDriverStep",
    "BaseUtilitiesStep",
    "SelectUserStep",
    "ConfigureUserStep",
    "CudaKeyringStep",
    "CudaToolkitStep",
    "CudaEnvironmentStep",
    "DevToolsStep",
    "InstallUvStep",
    "CleanupStep",
    "SummaryStep",
]
