"""Command construction for the Secure Properties Tool.

The argument order is fixed by the tool's CLI:
`string <encrypt|decrypt> <algorithm> <mode> [true] <password> <input>`.
"""

from __future__ import annotations

from core.config import ToolConfig
from core.domain.models import OperationRequest

INPUT_KIND = "string"
RANDOM_IV_FLAG = "true"


def build_args(request: OperationRequest) -> list[str]:
    args = [INPUT_KIND, request.operation.value, request.algorithm.value, request.mode.value]
    if request.wants_random_iv:
        args.append(RANDOM_IV_FLAG)
    args.extend([request.password, request.input_text])
    return args


def build(request: OperationRequest) -> str:
    """Tool parameters as one string, password and input in double quotes.

    Nothing is escaped here; the bridge escapes the whole composed command.
    """

    params = f"{INPUT_KIND} {request.operation.value} {request.algorithm.value} {request.mode.value}"
    if request.wants_random_iv:
        params += f" {RANDOM_IV_FLAG}"
    params += f' "{request.password}" "{request.input_text}"'
    return params


def build_argv(request: OperationRequest, config: ToolConfig) -> list[str]:
    """Argument vector for direct process execution (no shell involved)."""

    return [
        config.java_executable,
        config.classpath_flag,
        str(config.jar_path),
        config.main_class,
        *build_args(request),
    ]


def build_shell_command(request: OperationRequest, config: ToolConfig) -> str:
    """Shell command line handed to the macOS `do shell script` bridge."""

    return (
        f'cd "{config.home_dir}" && {config.java_executable} {config.classpath_flag} '
        f'"{config.jar_path}" {config.main_class} {build(request)}'
    )


def mask_argv(argv: list[str]) -> list[str]:
    """Copy of `argv` with the password (second to last argument) hidden, for logging."""

    if len(argv) < 2:
        return list(argv)
    return [*argv[:-2], "***", argv[-1]]
