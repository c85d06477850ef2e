"""Encrypt/decrypt orchestration.

One call runs a single pass:
validate input -> (decrypt: strip wrapper) -> ensure JAR -> resolve password
-> build command -> execute.

Validation problems are reported verbatim and stop before anything external
runs. Download and execution failures are explained by the error classifier,
keeping the raw message. Side-effects that belong to a UI (toasts, clipboard)
stay out of here; front-ends get callbacks through `PipelineHooks`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from pydantic import ValidationError

from adapters.artifact_manager import ArtifactManager
from adapters.shell_executor import ShellExecutor
from core import command_builder, messages
from core.config import AppSettings, ToolConfig
from core.domain.errors import (
    DownloadError,
    ExecError,
    PasswordNotSetError,
    RequestValidationError,
)
from core.domain.models import (
    Algorithm,
    Mode,
    Operation,
    OperationInput,
    OperationOutcome,
    OperationRequest,
    OutcomeStatus,
)
from core.error_classifier import error_text, explain, match
from core.interfaces.executor import CommandExecutor
from core.text import strip_wrapper

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers."""

    artifact_downloaded: Callable[[], None] | None = None


def validate_input(data: OperationInput) -> tuple[Algorithm, Mode]:
    """Check the raw input and return the parsed algorithm and mode."""

    if not data.input_text:
        raise RequestValidationError(messages.REQUIRED_INPUT)
    try:
        algorithm = Algorithm(data.algorithm)
    except ValueError as exc:
        choices = ", ".join(a.value for a in Algorithm)
        raise RequestValidationError(f"Unsupported algorithm: {data.algorithm}. Choose one of: {choices}.") from exc
    try:
        mode = Mode(data.mode)
    except ValueError as exc:
        choices = ", ".join(m.value for m in Mode)
        raise RequestValidationError(f"Unsupported mode: {data.mode}. Choose one of: {choices}.") from exc
    return algorithm, mode


def resolve_password(explicit: str | None, default: str | None) -> str:
    password = explicit or default
    if not password:
        raise PasswordNotSetError(messages.PASSWORD_NOT_SET)
    return password


def success_message(operation: Operation) -> str:
    return messages.ENCRYPT_SUCCESS if operation is Operation.ENCRYPT else messages.DECRYPT_SUCCESS


def _invalid(exc: RequestValidationError, *, downloaded: bool = False) -> OperationOutcome:
    status = OutcomeStatus.PASSWORD_MISSING if isinstance(exc, PasswordNotSetError) else OutcomeStatus.INVALID_INPUT
    return OperationOutcome(status=status, message=str(exc), artifact_downloaded=downloaded)


def _failed(operation: Operation, raw: str, *, downloaded: bool = False) -> OperationOutcome:
    pattern = match(raw)
    logger.error(
        "%s error (%s): %s",
        operation.label(),
        pattern.substring if pattern is not None else "unclassified",
        raw,
    )
    return OperationOutcome(
        status=OutcomeStatus.FAILED,
        message=explain(raw),
        artifact_downloaded=downloaded,
        raw_error=raw,
    )


async def execute_request(
    request: OperationRequest,
    *,
    config: ToolConfig,
    executor: CommandExecutor,
) -> str:
    """Run the tool for an already validated request using the configured bridge."""

    if config.bridge == "applescript":
        logger.debug("Running %s via do shell script", request.operation.value)
        return await executor.run(command_builder.build_shell_command(request, config))

    argv = command_builder.build_argv(request, config)
    logger.debug("Running %s", " ".join(command_builder.mask_argv(argv)))
    return await executor.run_argv(argv)


async def run_operation(
    data: OperationInput,
    *,
    settings: AppSettings,
    config: ToolConfig,
    manager: ArtifactManager | None = None,
    executor: CommandExecutor | None = None,
    hooks: PipelineHooks | None = None,
) -> OperationOutcome:
    hooks = hooks or PipelineHooks()
    manager = manager or ArtifactManager(config)
    executor = executor or ShellExecutor(timeout_seconds=config.exec_timeout_seconds)
    operation = data.operation

    try:
        algorithm, mode = validate_input(data)
    except RequestValidationError as exc:
        return _invalid(exc)

    input_text = data.input_text
    if operation is Operation.DECRYPT and data.strip_wrapper:
        input_text = strip_wrapper(input_text)
        if not input_text:
            return _invalid(RequestValidationError(messages.REQUIRED_INPUT))

    try:
        downloaded = await manager.ensure()
    except DownloadError as exc:
        return _failed(operation, error_text(exc))
    if downloaded and hooks.artifact_downloaded:
        hooks.artifact_downloaded()

    try:
        password = resolve_password(data.password, settings.default_password)
        request = OperationRequest(
            operation=operation,
            input_text=input_text,
            password=password,
            algorithm=algorithm,
            mode=mode,
            use_random_iv=data.use_random_iv,
            strip_wrapper=data.strip_wrapper,
        )
    except RequestValidationError as exc:
        return _invalid(exc, downloaded=downloaded)
    except ValidationError:
        return _invalid(RequestValidationError(messages.REQUIRED_INPUT), downloaded=downloaded)

    try:
        output = await execute_request(request, config=config, executor=executor)
    except ExecError as exc:
        return _failed(operation, exc.raw_message, downloaded=downloaded)

    return OperationOutcome(
        status=OutcomeStatus.SUCCESS,
        message=success_message(operation),
        output=output,
        artifact_downloaded=downloaded,
    )
