"""Enter/leave scripts for directory-scoped environment-hook tools."""

import logging
import shlex
from pathlib import Path
from typing import Dict, Optional

from ..models.environment import EnvironmentConfig
from ..services.exceptions import ConfigError
from .constants import CLI_NAME, HOOK_TOOLS, SESSION_ENV_VAR

logger = logging.getLogger(__name__)

# bash runs an EXIT trap when the shell exits, even if set from a sourced file
BASH_ENTER_SCRIPT = """# {cli} enter hook for {project}
export {session_var}=$$
{cli_call} up
alias {alias}={shell_cmd}
trap {down_cmd} EXIT
"""

BASH_LEAVE_SCRIPT = """# {cli} leave hook for {project}
{cli_call} down
unalias {alias} 2>/dev/null
trap - EXIT
unset {session_var}
"""

# zsh-autoenv sources from inside a function, where an EXIT trap fires on return
ZSH_ENTER_SCRIPT = """# {cli} enter hook for {project}
export {session_var}=$$
{cli_call} up
alias {alias}={shell_cmd}
{down_fn}() {{
    {cli_call} down
}}
autoload -Uz add-zsh-hook
add-zsh-hook zshexit {down_fn}
"""

ZSH_LEAVE_SCRIPT = """# {cli} leave hook for {project}
{cli_call} down
unalias {alias} 2>/dev/null
add-zsh-hook -d zshexit {down_fn}
unfunction {down_fn} 2>/dev/null
unset {session_var}
"""

SCRIPTS = {
    "smartcd": (BASH_ENTER_SCRIPT, BASH_LEAVE_SCRIPT),
    "autoenv": (ZSH_ENTER_SCRIPT, ZSH_LEAVE_SCRIPT),
}

DOWN_FUNCTION = "_gentoo_devenv_down"


class ShellHookRenderer:
    """Renders and installs the scripts an environment-hook tool sources.

    The enter script pins the shell's own pid as the session id, brings the
    container up, registers an alias that execs into it and an exit hook that
    tears it down when the shell exits. The leave script undoes all of that.
    """

    def __init__(self, project_root: Path, config: EnvironmentConfig,
                 cli_name: str = CLI_NAME, home: Optional[Path] = None):
        self.project_root = project_root.resolve()
        self.config = config
        self.cli_name = cli_name
        self.home = home or Path.home()

    def _cli_call(self) -> str:
        return f"{self.cli_name} --project-dir {shlex.quote(str(self.project_root))}"

    def _scripts(self, tool: Optional[str]):
        tool = tool or self.config.hook_tool
        if tool not in SCRIPTS:
            raise ConfigError(f"Unsupported hook tool '{tool}'. Choose from: {', '.join(HOOK_TOOLS)}")
        return SCRIPTS[tool]

    def _format(self, template: str) -> str:
        cli_call = self._cli_call()
        return template.format(
            cli=self.cli_name,
            project=self.project_root,
            session_var=SESSION_ENV_VAR,
            cli_call=cli_call,
            alias=self.config.alias,
            shell_cmd=shlex.quote(f"{cli_call} shell"),
            down_cmd=shlex.quote(f"{cli_call} down"),
            down_fn=DOWN_FUNCTION,
        )

    def render_enter(self, tool: Optional[str] = None) -> str:
        return self._format(self._scripts(tool)[0])

    def render_leave(self, tool: Optional[str] = None) -> str:
        return self._format(self._scripts(tool)[1])

    def hook_paths(self, tool: str) -> Dict[str, Path]:
        """Where the given tool expects its enter and leave scripts."""
        if tool == "smartcd":
            # smartcd mirrors the absolute directory path under its scripts dir
            script_dir = self.home / ".smartcd" / "scripts" / self.project_root.relative_to(self.project_root.anchor)
            return {
                "enter": script_dir / "bash_enter",
                "leave": script_dir / "bash_leave",
            }
        if tool == "autoenv":
            return {
                "enter": self.project_root / ".autoenv.zsh",
                "leave": self.project_root / ".autoenv_leave.zsh",
            }
        raise ConfigError(f"Unsupported hook tool '{tool}'. Choose from: {', '.join(HOOK_TOOLS)}")

    def install(self, tool: Optional[str] = None, force: bool = False) -> Dict[str, Path]:
        """Write the enter and leave scripts for a hook tool.

        Raises:
            ConfigError: If the tool is unknown or a script exists and force is off
        """
        tool = tool or self.config.hook_tool
        paths = self.hook_paths(tool)
        existing = [path for path in paths.values() if path.exists()]
        if existing and not force:
            raise ConfigError(
                f"Hook script already exists: {existing[0]} (use --force to overwrite)"
            )

        contents = {"enter": self.render_enter(tool), "leave": self.render_leave(tool)}
        for kind, path in paths.items():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents[kind])
            logger.info(f"Wrote {kind} hook: {path}")
        return paths
