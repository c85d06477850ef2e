from __future__ import annotations

import unittest
from pathlib import Path
from typing import Sequence

from core.config import AppSettings, ToolConfig
from core.domain.errors import DownloadError, ExecError, PasswordNotSetError
from core.domain.models import Operation, OperationInput, OutcomeStatus
from core.services.operation_pipeline import PipelineHooks, resolve_password, run_operation


class FakeManager:
    def __init__(self, *, downloaded: bool = False, error: Exception | None = None) -> None:
        self.downloaded = downloaded
        self.error = error
        self.calls = 0

    async def ensure(self) -> bool:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.downloaded


class FakeExecutor:
    def __init__(self, *, output: str = "result==", error: ExecError | None = None) -> None:
        self.output = output
        self.error = error
        self.argv_calls: list[list[str]] = []
        self.command_calls: list[str] = []

    async def run(self, command: str) -> str:
        self.command_calls.append(command)
        if self.error is not None:
            raise self.error
        return self.output

    async def run_argv(self, argv: Sequence[str]) -> str:
        self.argv_calls.append(list(argv))
        if self.error is not None:
            raise self.error
        return self.output


def _settings(default_password: str | None = None) -> AppSettings:
    return AppSettings(_env_file=None, default_password=default_password)


class PipelineTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.config = ToolConfig(home_dir=Path("/home/dev"))

    async def _run(
        self,
        data: OperationInput,
        *,
        settings: AppSettings | None = None,
        manager: FakeManager | None = None,
        executor: FakeExecutor | None = None,
        config: ToolConfig | None = None,
        hooks: PipelineHooks | None = None,
    ):
        return await run_operation(
            data,
            settings=settings or _settings(),
            config=config or self.config,
            manager=manager or FakeManager(),
            executor=executor or FakeExecutor(),
            hooks=hooks,
        )

    async def test_encrypt_success(self) -> None:
        executor = FakeExecutor(output="abc123==")
        outcome = await self._run(
            OperationInput(Operation.ENCRYPT, "hello", password="pw", algorithm="AES", mode="CBC"),
            executor=executor,
        )

        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.output, "abc123==")
        self.assertEqual(outcome.message, "Successfully encrypted and copied to clipboard:")
        self.assertEqual(
            executor.argv_calls[0][4:],
            ["string", "encrypt", "AES", "CBC", "pw", "hello"],
        )

    async def test_decrypt_strips_wrapper(self) -> None:
        executor = FakeExecutor(output="hello")
        outcome = await self._run(
            OperationInput(
                Operation.DECRYPT, "![XYZ123]", password="pw", algorithm="Blowfish", mode="CBC", strip_wrapper=True
            ),
            executor=executor,
        )

        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.message, "Successfully decrypted and copied to clipboard:")
        self.assertEqual(
            executor.argv_calls[0][4:],
            ["string", "decrypt", "Blowfish", "CBC", "pw", "XYZ123"],
        )

    async def test_decrypt_keeps_wrapper_when_disabled(self) -> None:
        executor = FakeExecutor()
        await self._run(
            OperationInput(Operation.DECRYPT, "![XYZ123]", password="pw", strip_wrapper=False),
            executor=executor,
        )

        self.assertEqual(executor.argv_calls[0][-1], "![XYZ123]")

    async def test_encrypt_never_strips_wrapper(self) -> None:
        executor = FakeExecutor()
        await self._run(
            OperationInput(Operation.ENCRYPT, "![keep]", password="pw", strip_wrapper=True),
            executor=executor,
        )

        self.assertEqual(executor.argv_calls[0][-1], "![keep]")

    async def test_random_iv_only_for_encrypt(self) -> None:
        executor = FakeExecutor()
        await self._run(OperationInput(Operation.ENCRYPT, "x", password="pw", use_random_iv=True), executor=executor)
        await self._run(OperationInput(Operation.DECRYPT, "x", password="pw", use_random_iv=True), executor=executor)

        self.assertIn("true", executor.argv_calls[0])
        self.assertNotIn("true", executor.argv_calls[1])

    async def test_empty_input_stops_before_anything_runs(self) -> None:
        manager = FakeManager()
        executor = FakeExecutor()
        outcome = await self._run(
            OperationInput(Operation.ENCRYPT, "", password="pw"), manager=manager, executor=executor
        )

        self.assertEqual(outcome.status, OutcomeStatus.INVALID_INPUT)
        self.assertEqual(outcome.message, "Input text is required.")
        self.assertEqual(manager.calls, 0)
        self.assertEqual(executor.argv_calls, [])

    async def test_unknown_algorithm_is_rejected(self) -> None:
        manager = FakeManager()
        outcome = await self._run(
            OperationInput(Operation.ENCRYPT, "x", password="pw", algorithm="ROT13"), manager=manager
        )

        self.assertEqual(outcome.status, OutcomeStatus.INVALID_INPUT)
        self.assertIn("ROT13", outcome.message)
        self.assertEqual(manager.calls, 0)

    async def test_unknown_mode_is_rejected(self) -> None:
        outcome = await self._run(OperationInput(Operation.ENCRYPT, "x", password="pw", mode="GCM"))

        self.assertEqual(outcome.status, OutcomeStatus.INVALID_INPUT)
        self.assertIn("GCM", outcome.message)

    async def test_default_password_is_used_as_fallback(self) -> None:
        executor = FakeExecutor()
        outcome = await self._run(
            OperationInput(Operation.ENCRYPT, "x"), settings=_settings("stored"), executor=executor
        )

        self.assertTrue(outcome.ok)
        self.assertEqual(executor.argv_calls[0][-2], "stored")

    async def test_explicit_password_wins(self) -> None:
        executor = FakeExecutor()
        await self._run(
            OperationInput(Operation.ENCRYPT, "x", password="explicit"),
            settings=_settings("stored"),
            executor=executor,
        )

        self.assertEqual(executor.argv_calls[0][-2], "explicit")

    async def test_missing_password_is_distinct_and_spawns_nothing(self) -> None:
        executor = FakeExecutor()
        outcome = await self._run(OperationInput(Operation.DECRYPT, "abc", password=""), executor=executor)

        self.assertEqual(outcome.status, OutcomeStatus.PASSWORD_MISSING)
        self.assertEqual(
            outcome.message,
            "No password provided. Please enter a password or set a default in preferences.",
        )
        self.assertEqual(executor.argv_calls, [])
        self.assertEqual(executor.command_calls, [])

    async def test_download_failure_is_classified(self) -> None:
        executor = FakeExecutor()
        outcome = await self._run(
            OperationInput(Operation.ENCRYPT, "x", password="pw"),
            manager=FakeManager(error=DownloadError("Failed to download file. Status code: 404")),
            executor=executor,
        )

        self.assertEqual(outcome.status, OutcomeStatus.FAILED)
        self.assertTrue(outcome.message.startswith("An error occurred during the operation."))
        self.assertTrue(outcome.message.endswith("Failed to download file. Status code: 404"))
        self.assertEqual(executor.argv_calls, [])

    async def test_exec_failure_is_classified(self) -> None:
        raw = "javax.crypto.BadPaddingException: Given final block not properly padded"
        outcome = await self._run(
            OperationInput(Operation.DECRYPT, "abc", password="pw"),
            executor=FakeExecutor(error=ExecError(raw, exit_code=1)),
        )

        self.assertEqual(outcome.status, OutcomeStatus.FAILED)
        self.assertEqual(outcome.raw_error, raw)
        self.assertEqual(
            outcome.message,
            "This may indicate an incorrect password or corrupted encrypted text.\nOriginal Error: " + raw,
        )

    async def test_download_hook_fires_only_after_fresh_download(self) -> None:
        fired: list[bool] = []
        hooks = PipelineHooks(artifact_downloaded=lambda: fired.append(True))

        outcome = await self._run(
            OperationInput(Operation.ENCRYPT, "x", password="pw"), manager=FakeManager(downloaded=True), hooks=hooks
        )
        await self._run(
            OperationInput(Operation.ENCRYPT, "x", password="pw"), manager=FakeManager(downloaded=False), hooks=hooks
        )

        self.assertTrue(outcome.artifact_downloaded)
        self.assertEqual(fired, [True])

    async def test_applescript_bridge_receives_shell_command(self) -> None:
        config = ToolConfig(home_dir=Path("/home/dev"), bridge="applescript")
        executor = FakeExecutor()
        await self._run(
            OperationInput(Operation.ENCRYPT, "hello", password="pw", algorithm="AES"),
            config=config,
            executor=executor,
        )

        self.assertEqual(executor.argv_calls, [])
        self.assertTrue(executor.command_calls[0].endswith('string encrypt AES CBC "pw" "hello"'))

    async def test_wrapper_only_input_is_rejected_before_download(self) -> None:
        manager = FakeManager(downloaded=True)
        executor = FakeExecutor()
        outcome = await self._run(
            OperationInput(Operation.DECRYPT, "![]", password="pw", strip_wrapper=True),
            manager=manager,
            executor=executor,
        )

        self.assertEqual(outcome.status, OutcomeStatus.INVALID_INPUT)
        self.assertEqual(outcome.message, "Input text is required.")
        self.assertFalse(outcome.artifact_downloaded)
        self.assertEqual(manager.calls, 0)
        self.assertEqual(executor.argv_calls, [])


class ResolvePasswordTestCase(unittest.TestCase):
    def test_resolution_order(self) -> None:
        self.assertEqual(resolve_password("a", "b"), "a")
        self.assertEqual(resolve_password("", "b"), "b")
        self.assertEqual(resolve_password(None, "b"), "b")

    def test_both_missing_raises(self) -> None:
        with self.assertRaises(PasswordNotSetError):
            resolve_password(None, "")


if __name__ == "__main__":
    unittest.main()
