"""Release orchestration: version gate, source staging, ordered publishing."""

from .dry_run import DryRunGuard
from .errors import PlanError, PublishError, StageError, VersionError
from .model import Package, PublishMode, PublishPlan, PublishResult, PublishState
from .plan import build_plan
from .registry import CargoRegistryClient, RegistryClient
from .sequencer import PublishSequencer
from .service import ReleaseService, RunOutcome
from .stager import SourceStager
from .toolchain import CommandToolchain, ToolchainQuery, check_version, gate

__all__ = [
    # errors
    "PlanError",
    "PublishError",
    "StageError",
    "VersionError",
    # model
    "Package",
    "PublishMode",
    "PublishPlan",
    "PublishResult",
    "PublishState",
    "build_plan",
    # collaborators
    "CargoRegistryClient",
    "CommandToolchain",
    "RegistryClient",
    "ToolchainQuery",
    # flow
    "DryRunGuard",
    "PublishSequencer",
    "ReleaseService",
    "RunOutcome",
    "SourceStager",
    "check_version",
    "gate",
]
