from .step_10_resolve_toolchain import ResolveToolchainStep
from .step_15_backup_env import BackupEnvStep
from .step_20_init_submodules import InitSubmodulesStep
from .step_30_link_firemarshal import LinkFireMarshalStep
from .step_40_build_toolchain import BuildToolchainStep
from .step_50_provision_ec2 import ProvisionEc2Step
from .step_60_build_libraries import BuildLibdwarfStep, BuildLibelfStep
from .step_70_generate_tags import GenerateTagsStep
from .step_90_write_env import NEXT_STEPS, WriteEnvStep

__all__ = [
    "ResolveToolchainStep",
    "BackupEnvStep",
    "InitSubmodulesStep",
    "LinkFireMarshalStep",
    "BuildToolchainStep",
    "ProvisionEc2Step",
    "BuildLibelfStep",
    "BuildLibdwarfStep",
    "GenerateTagsStep",
    "WriteEnvStep",
    "NEXT_STEPS",
]
