"""Environment file generation service."""

from pathlib import Path

from src.core.lib_logger import get_component_logger
from src.lib.exceptions import MissingDirectoryError
from src.lib.paths import display_path
from src.models.run_config import RunConfig
from src.models.target import Target

logger = get_component_logger("env_files")


class EnvFileWriter:
    """Writes a target's .env file only when it does not exist yet."""

    def __init__(self, project_root: Path):
        self.project_root = project_root

    def ensure(self, target: Target, run_config: RunConfig) -> bool:
        """Create the target's environment file if absent.

        Existing files are never touched, whatever they contain.

        Returns:
            bool: True if the file was created, False if it already existed

        Raises:
            MissingDirectoryError: If the target directory does not exist
        """
        env_file = target.build_env_file(run_config)
        shown = display_path(env_file.path, self.project_root)

        if not target.directory.is_dir():
            raise MissingDirectoryError(
                f"{target.name.title()} directory not found!", path=target.directory
            )

        if env_file.path.exists():
            logger.info(f"{shown} already exists, skipping...")
            return False

        try:
            # "x" refuses to replace a file created since the check above
            with open(env_file.path, "x", encoding="utf-8", newline="\n") as f:
                f.write(env_file.render())
        except FileExistsError:
            logger.info(f"{shown} already exists, skipping...")
            return False

        logger.info(f"Created {shown}")
        return True
