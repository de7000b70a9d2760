"""Environment configuration and loading for proclaunch.

Centralizes the user config path and dotenv loading. The CLI calls
load_user_env() before reading LauncherConfig from the environment.
"""

from pathlib import Path

from dotenv import load_dotenv

# User config directory (stores .env)
USER_CONFIG_DIR = Path.home() / ".config" / "proclaunch"


def load_user_env() -> None:
    """Load environment from user config directory.

    Loads ${USER_CONFIG_DIR}/.env (typically ~/.config/proclaunch/.env).
    Variables already set in the process environment win.
    """
    load_dotenv(dotenv_path=USER_CONFIG_DIR / ".env")


def load_env(env_path: Path | None = None) -> None:
    """Load environment from user config and optionally an extra file.

    Backs the CLI --env-file option.

    Args:
        env_path: Optional .env file loaded after the user one with
            override=True.
    """
    load_user_env()
    if env_path is not None:
        load_dotenv(dotenv_path=env_path, override=True)
