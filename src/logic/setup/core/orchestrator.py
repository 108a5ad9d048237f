"""Setup orchestrator to coordinate the ordered setup steps."""

from pathlib import Path
from typing import Callable, List, Optional

from src.cli.utils.branding import SetupBranding
from src.core.config import SetupSettings
from src.core.lib_logger import get_component_logger
from src.lib.exceptions import (
    EXIT_GENERAL_ERROR,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    MissingDirectoryError,
    SetupError,
)
from src.logic.setup.services.env_writer import EnvFileWriter
from src.logic.setup.services.freshness import FreshnessChecker
from src.logic.setup.services.installer import DependencyInstaller
from src.logic.setup.services.prerequisites import PrerequisiteChecker, display_name
from src.logic.setup.services.verifier import InstallVerifier
from src.models.run_config import KNOWN_ENVIRONMENTS, RunConfig
from src.models.setup_report import SetupReport, SetupStep, StepStatus
from src.models.target import Target, TargetKind

logger = get_component_logger("orchestrator")

_DEPENDENCY_STEPS = {
    TargetKind.SERVER: SetupStep.SERVER_DEPENDENCIES,
    TargetKind.CLIENT: SetupStep.CLIENT_DEPENDENCIES,
}


class SetupOrchestrator:
    """Runs prerequisite check, env files, dependency sync and verification."""

    def __init__(
        self,
        settings: SetupSettings,
        project_root: Optional[Path] = None,
        branding: Optional[SetupBranding] = None
    ):
        """Initialize the orchestrator.

        Args:
            settings: Setup settings
            project_root: Directory holding the server and client projects
            branding: Banner renderer, defaults to stdout/stderr consoles
        """
        self.settings = settings
        self.project_root = settings.resolve_project_root(project_root)
        self.branding = branding or SetupBranding()

        self.freshness = FreshnessChecker(settings)
        self.prerequisites = PrerequisiteChecker(settings)
        self.env_writer = EnvFileWriter(self.project_root)
        self.verifier = InstallVerifier()
        self.installer = DependencyInstaller(settings, self.freshness)

        self.targets: List[Target] = [
            Target(
                kind=TargetKind(name),
                directory=self.project_root / directory,
                dependencies_dir_name=settings.dependencies_dir,
                manifest_name=settings.manifest_name,
                lock_name=settings.lock_name
            )
            for name, directory in settings.target_dirs.items()
        ]

    def run(self, run_config: RunConfig) -> SetupReport:
        """Run every step in order, stopping at the first failure.

        The failure banner is printed on every non-zero exit, including
        interrupts and unexpected exceptions, which are re-raised.

        Returns:
            SetupReport with step outcomes and the exit code
        """
        report = SetupReport(run_config=run_config, project_root=self.project_root)

        try:
            self.branding.print_header(run_config)
            if not run_config.is_known_environment:
                logger.warning(
                    f"Unknown environment '{run_config.environment}' "
                    f"(expected one of: {', '.join(KNOWN_ENVIRONMENTS)})"
                )

            if not self.project_root.is_dir():
                raise MissingDirectoryError(
                    f"Project root {self.project_root} not found!", path=self.project_root
                )

            self._run_step(report, SetupStep.PREREQUISITES, self._check_prerequisites)
            self._run_step(report, SetupStep.ENV_FILES, lambda: self._write_env_files(run_config))
            for target in self.targets:
                self._run_step(report, _DEPENDENCY_STEPS[target.kind], lambda t=target: self._sync_target(t))
            self._run_step(report, SetupStep.VERIFICATION, self._verify)

            report.exit_code = EXIT_SUCCESS
            self.branding.print_success(self.targets, self.settings.package_manager)

        except SetupError as e:
            logger.error(e.message, extra={"error_details": e.details})
            report.exit_code = e.exit_code
            report.error = e.to_dict()

        except KeyboardInterrupt:
            logger.error("Setup interrupted")
            report.exit_code = EXIT_INTERRUPTED

        finally:
            if report.exit_code is None:
                # Unexpected exception on its way out
                report.exit_code = EXIT_GENERAL_ERROR
            if report.exit_code != EXIT_SUCCESS:
                self.branding.print_failure(report.exit_code)

        return report

    def _run_step(self, report: SetupReport, step: SetupStep, action: Callable[[], StepStatus]) -> None:
        record = report.record(step)
        record.transition_to(StepStatus.IN_PROGRESS)
        try:
            status = action()
        except SetupError as e:
            record.transition_to(StepStatus.FAILED, detail=e.message)
            raise
        record.transition_to(status, detail=self._step_detail(step, status))

    def _step_detail(self, step: SetupStep, status: StepStatus) -> str:
        if step == SetupStep.ENV_FILES:
            return "env files created" if status == StepStatus.COMPLETED else "env files already exist"
        if step in _DEPENDENCY_STEPS.values():
            return "dependencies installed" if status == StepStatus.COMPLETED else "dependencies up to date"
        return "ok"

    def _check_prerequisites(self) -> StepStatus:
        logger.info("Checking prerequisites...")
        tools = self.prerequisites.check()
        self.installer.package_manager_path = tools.package_manager.path
        logger.info(
            f"Prerequisites met: {display_name(tools.runtime.command)} "
            f"{tools.runtime.display_version}, "
            f"{display_name(tools.package_manager.command)} {tools.package_manager.display_version}"
        )
        return StepStatus.COMPLETED

    def _write_env_files(self, run_config: RunConfig) -> StepStatus:
        logger.info("Setting up environment files...")
        created = [self.env_writer.ensure(target, run_config) for target in self.targets]
        return StepStatus.COMPLETED if any(created) else StepStatus.SKIPPED

    def _sync_target(self, target: Target) -> StepStatus:
        logger.info(f"Setting up {target.label}...")
        installed = self.installer.sync(target)
        return StepStatus.COMPLETED if installed else StepStatus.SKIPPED

    def _verify(self) -> StepStatus:
        logger.info("Verifying installation...")
        self.verifier.verify(self.targets)
        return StepStatus.COMPLETED
