"""Tools package: environment loading utilities."""

from proclaunch.tools.env import USER_CONFIG_DIR, load_env, load_user_env

__all__ = ["USER_CONFIG_DIR", "load_env", "load_user_env"]
