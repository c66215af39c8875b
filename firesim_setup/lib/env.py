from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    """Locations inside a FireSim checkout, relative to its root."""

    env_file: str = "env.sh"
    env_backup_suffix: str = ".backup"
    toolchain_install: str = "riscv-tools-install"
    chipyard_submodule: str = "target-design/chipyard"
    marshal_in_chipyard: str = "software/firemarshal"
    marshal_config: str = "marshal-config.yaml"
    marshal_link: str = "sw/firesim-software"
    marshal_link_standalone: str = "../target-design/chipyard/software/firemarshal"
    marshal_link_library: str = "../../../software/firemarshal"
    aws_fpga: str = "platforms/f1/aws-fpga"
    xdma_driver: str = "platforms/f1/aws-fpga/sdk/linux_kernel_drivers/xdma"


PATHS = Paths()

# Relative to this repository's position inside the Chipyard submodule tree.
MARSHAL_FIRESIM_DIR = "../../../../"
